##############################################################################
#
# Copyright (c) 2006 Nuxeo and Contributors.
# All Rights Reserved.
#
# This software is subject to the provisions of the Zope Public License,
# Version 2.1 (ZPL).  A copy of the ZPL should accompany this distribution.
# THIS SOFTWARE IS PROVIDED "AS IS" AND ANY AND ALL EXPRESS OR IMPLIED
# WARRANTIES ARE DISCLAIMED, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF TITLE, MERCHANTABILITY, AGAINST INFRINGEMENT, AND FITNESS
# FOR A PARTICULAR PURPOSE.
#
##############################################################################
# $Id$
"""Fake CMIS binding.

Keeps the repositories in memory, and records every service call in
``FakeRepository.calls`` as a tuple (`name`, `args`).
"""

from io import BytesIO

import zope.interface

from nuxeo.cmis.interfaces import IRepositoryBinding
from nuxeo.cmis.interfaces import IRepositoryService
from nuxeo.cmis.interfaces import IObjectService
from nuxeo.cmis.interfaces import IVersioningService
from nuxeo.cmis.interfaces import CmisConstraintException
from nuxeo.cmis.interfaces import CmisContentAlreadyExistsException
from nuxeo.cmis.interfaces import CmisNotSupportedException
from nuxeo.cmis.interfaces import CmisObjectNotFoundException
from nuxeo.cmis.interfaces import CmisUpdateConflictException
from nuxeo.cmis.interfaces import CmisVersioningException
from nuxeo.cmis.constants import BaseTypeId
from nuxeo.cmis.constants import Cardinality
from nuxeo.cmis.constants import CmisVersion
from nuxeo.cmis.constants import PropertyIds as P
from nuxeo.cmis.constants import PropertyType
from nuxeo.cmis.constants import RENDITION_NONE
from nuxeo.cmis.constants import Updatability as U
from nuxeo.cmis.constants import VersioningState
from nuxeo.cmis.data import ContentStream
from nuxeo.cmis.data import ObjectData
from nuxeo.cmis.data import Rendition
from nuxeo.cmis.data import RepositoryInfo
from nuxeo.cmis.schema import ObjectType
from nuxeo.cmis.schema import PropertyDefinition


STORAGES = {}


def cleanUp():
    STORAGES.clear()


def getRepository(repositoryId, **kw):
    """Get the fake repository for an id, creating it if needed.
    """
    repository = STORAGES.get(repositoryId)
    if repository is None:
        repository = STORAGES[repositoryId] = FakeRepository(repositoryId,
                                                             **kw)
    return repository


def _def(id, updatability=U.READONLY, propertyType=PropertyType.STRING,
         cardinality=Cardinality.SINGLE):
    return PropertyDefinition(id, propertyType, cardinality, updatability)

BASE_PROPERTIES = [
    _def(P.NAME, U.READWRITE),
    _def(P.DESCRIPTION, U.READWRITE),
    _def(P.OBJECT_ID, propertyType=PropertyType.ID),
    _def(P.BASE_TYPE_ID, propertyType=PropertyType.ID),
    _def(P.OBJECT_TYPE_ID, U.ONCREATE, PropertyType.ID),
    _def(P.SECONDARY_OBJECT_TYPE_IDS, U.READWRITE, PropertyType.ID,
         Cardinality.MULTI),
    _def(P.CREATED_BY),
    _def(P.CHANGE_TOKEN),
    ]

DOCUMENT_PROPERTIES = BASE_PROPERTIES + [
    _def(P.IS_IMMUTABLE, propertyType=PropertyType.BOOLEAN),
    _def(P.IS_LATEST_VERSION, propertyType=PropertyType.BOOLEAN),
    _def(P.IS_MAJOR_VERSION, propertyType=PropertyType.BOOLEAN),
    _def(P.IS_LATEST_MAJOR_VERSION, propertyType=PropertyType.BOOLEAN),
    _def(P.IS_PRIVATE_WORKING_COPY, propertyType=PropertyType.BOOLEAN),
    _def(P.VERSION_LABEL),
    _def(P.VERSION_SERIES_ID, propertyType=PropertyType.ID),
    _def(P.IS_VERSION_SERIES_CHECKED_OUT, propertyType=PropertyType.BOOLEAN),
    _def(P.VERSION_SERIES_CHECKED_OUT_BY),
    _def(P.VERSION_SERIES_CHECKED_OUT_ID, propertyType=PropertyType.ID),
    _def(P.CHECKIN_COMMENT),
    _def(P.CONTENT_STREAM_LENGTH, propertyType=PropertyType.INTEGER),
    _def(P.CONTENT_STREAM_MIME_TYPE),
    _def(P.CONTENT_STREAM_FILE_NAME),
    _def(P.CONTENT_STREAM_ID, propertyType=PropertyType.ID),
    _def(P.CONTENT_STREAM_HASH, cardinality=Cardinality.MULTI),
    ]

FOLDER_PROPERTIES = BASE_PROPERTIES + [
    _def(P.PARENT_ID, propertyType=PropertyType.ID),
    _def(P.PATH),
    ]

TEST_PROPERTIES = DOCUMENT_PROPERTIES + [
    _def('test:a', U.READWRITE),
    _def('test:b', U.ONCREATE),
    _def('test:c', U.READONLY),
    _def('test:w', U.WHENCHECKEDOUT),
    ]

TYPES = [
    ObjectType(BaseTypeId.CMIS_DOCUMENT, BaseTypeId.CMIS_DOCUMENT,
               DOCUMENT_PROPERTIES, versionable=True),
    ObjectType(BaseTypeId.CMIS_FOLDER, BaseTypeId.CMIS_FOLDER,
               FOLDER_PROPERTIES),
    ObjectType('test:document', BaseTypeId.CMIS_DOCUMENT, TEST_PROPERTIES,
               parentTypeId=BaseTypeId.CMIS_DOCUMENT, versionable=True),
    ]


class FakeObject(object):
    def __init__(self, properties, content=None, renditions=None):
        self.properties = properties
        self.content = content
        self.renditions = renditions or {}


class FakeRepository(object):
    """In-memory repository.

    ``versionOnContentChange`` makes content changes create a new
    version, ``reportIds`` set to False makes mutations report no id,
    ``copySupported`` set to False makes server-side copy unsupported
    by the binding.
    """

    user = 'fakeuser'

    def __init__(self, repositoryId, cmisVersion=CmisVersion.CMIS_1_1,
                 capabilities=None):
        self.info = RepositoryInfo(repositoryId, 'Fake repository',
                                   cmisVersion, capabilities)
        self.types = dict((t.id, t) for t in TYPES)
        self.data = {}
        self.calls = []
        self.versionOnContentChange = False
        self.reportIds = True
        self.copySupported = True
        self._next_id = 1
        self._next_token = 1
        self.root_id = self.addFolder('', None)

    def newId(self, prefix='obj'):
        id = '%s-%04d' % (prefix, self._next_id)
        self._next_id += 1
        return id

    def newToken(self):
        token = 'ct-%d' % self._next_token
        self._next_token += 1
        return token

    def callNames(self):
        return [name for name, args in self.calls]

    def callsOf(self, name):
        return [args for n, args in self.calls if n == name]

    #
    # Direct manipulation, not recorded
    #

    def addFolder(self, name, parentId):
        id = self.newId('folder')
        self.data[id] = FakeObject({
            P.OBJECT_ID: id,
            P.NAME: name,
            P.BASE_TYPE_ID: BaseTypeId.CMIS_FOLDER,
            P.OBJECT_TYPE_ID: BaseTypeId.CMIS_FOLDER,
            P.PARENT_ID: parentId,
            P.CHANGE_TOKEN: self.newToken(),
            })
        return id

    def addDocument(self, name, content=None, mimeType='text/plain',
                    typeId='test:document', properties=None,
                    renditions=None, major=True):
        """Create a document as the first version of a new series.
        """
        id = self.newId()
        props = {
            P.OBJECT_ID: id,
            P.NAME: name,
            P.BASE_TYPE_ID: BaseTypeId.CMIS_DOCUMENT,
            P.OBJECT_TYPE_ID: typeId,
            P.CREATED_BY: self.user,
            P.CHANGE_TOKEN: self.newToken(),
            P.IS_IMMUTABLE: False,
            P.IS_LATEST_VERSION: True,
            P.IS_MAJOR_VERSION: major,
            P.IS_LATEST_MAJOR_VERSION: major,
            P.IS_PRIVATE_WORKING_COPY: False,
            P.VERSION_LABEL: major and '1.0' or '0.1',
            P.VERSION_SERIES_ID: 'vs-' + id,
            P.IS_VERSION_SERIES_CHECKED_OUT: False,
            P.VERSION_SERIES_CHECKED_OUT_BY: None,
            P.VERSION_SERIES_CHECKED_OUT_ID: None,
            P.CHECKIN_COMMENT: None,
            }
        props.update(properties or {})
        obj = FakeObject(props, renditions=renditions)
        self.data[id] = obj
        if content is not None:
            self._setContent(obj, content, name, mimeType)
        return id

    def touch(self, id):
        """Simulate a change by another client.
        """
        self._get(id).properties[P.CHANGE_TOKEN] = self.newToken()

    def _get(self, id):
        try:
            return self.data[id]
        except KeyError:
            raise CmisObjectNotFoundException(id)

    def _setContent(self, obj, content, fileName, mimeType):
        props = obj.properties
        obj.content = content
        if content is None:
            for key in (P.CONTENT_STREAM_LENGTH, P.CONTENT_STREAM_MIME_TYPE,
                        P.CONTENT_STREAM_FILE_NAME, P.CONTENT_STREAM_ID,
                        P.CONTENT_STREAM_HASH):
                props.pop(key, None)
            return
        props[P.CONTENT_STREAM_LENGTH] = len(content)
        props[P.CONTENT_STREAM_MIME_TYPE] = mimeType
        props[P.CONTENT_STREAM_FILE_NAME] = fileName
        props[P.CONTENT_STREAM_ID] = 'stream-' + props[P.OBJECT_ID]
        props[P.CONTENT_STREAM_HASH] = ['{md5}%08x' % (hash(content)
                                                       & 0xffffffff)]

    def _checkToken(self, obj, changeToken):
        current = obj.properties.get(P.CHANGE_TOKEN)
        if changeToken is not None and changeToken != current:
            raise CmisUpdateConflictException(
                "Change token %r is not current" % changeToken)

    def _series(self, versionSeriesId):
        return [obj for obj in self.data.values()
                if obj.properties.get(P.VERSION_SERIES_ID) == versionSeriesId]

    def _versions(self, versionSeriesId):
        # latest first
        versions = [obj for obj in self._series(versionSeriesId)
                    if not obj.properties[P.IS_PRIVATE_WORKING_COPY]]
        versions.sort(key=lambda obj: obj.properties[P.OBJECT_ID],
                      reverse=True)
        return versions

    def _newVersion(self, source, major, properties=None, content=None,
                    comment=None):
        """Make a new version in the series of `source`.
        """
        id = self.newId()
        props = dict(source.properties)
        props.update(properties or {})
        series = props[P.VERSION_SERIES_ID]
        versions = self._versions(series)
        for obj in versions:
            obj.properties[P.IS_LATEST_VERSION] = False
            if major:
                obj.properties[P.IS_LATEST_MAJOR_VERSION] = False
        if versions:
            label = versions[0].properties[P.VERSION_LABEL]
        else:
            label = '0.0'
        maj, min = [int(x) for x in label.split('.')]
        if major:
            label = '%d.0' % (maj + 1)
        else:
            label = '%d.%d' % (maj, min + 1)
        props.update({
            P.OBJECT_ID: id,
            P.CHANGE_TOKEN: self.newToken(),
            P.IS_LATEST_VERSION: True,
            P.IS_MAJOR_VERSION: major,
            P.IS_LATEST_MAJOR_VERSION: major,
            P.IS_PRIVATE_WORKING_COPY: False,
            P.VERSION_LABEL: label,
            P.CHECKIN_COMMENT: comment,
            })
        obj = FakeObject(props, renditions=dict(source.renditions))
        self.data[id] = obj
        if content is None:
            content = source.content
        if content is not None:
            self._setContent(obj, content,
                             props.get(P.CONTENT_STREAM_FILE_NAME),
                             props.get(P.CONTENT_STREAM_MIME_TYPE))
        else:
            self._setContent(obj, None, None, None)
        return id

    def _setCheckedOut(self, versionSeriesId, pwcId):
        for obj in self._series(versionSeriesId):
            obj.properties[P.IS_VERSION_SERIES_CHECKED_OUT] = pwcId is not None
            obj.properties[P.VERSION_SERIES_CHECKED_OUT_ID] = pwcId
            obj.properties[P.VERSION_SERIES_CHECKED_OUT_BY] = (
                pwcId is not None and self.user or None)

    def _report(self, id):
        if not self.reportIds:
            return None
        return id

    def _objectData(self, obj, filter, includeAllowableActions,
                    renditionFilter=None, includePolicyIds=False,
                    includeAcl=False):
        props = obj.properties
        if filter is not None and filter != '*':
            names = set(filter.split(','))
            props = dict((k, v) for k, v in props.items() if k in names)
        else:
            props = dict(props)
        allowableActions = None
        if includeAllowableActions:
            allowableActions = {
                'canSetContentStream': True,
                'canCheckOut': not obj.properties.get(
                    P.IS_VERSION_SERIES_CHECKED_OUT, False),
                }
        renditions = None
        if renditionFilter and renditionFilter != RENDITION_NONE:
            renditions = [Rendition(streamId, mimeType, len(data))
                          for streamId, (mimeType, data)
                          in sorted(obj.renditions.items())]
        policyIds = includePolicyIds and [] or None
        acl = includeAcl and [] or None
        return ObjectData(props, allowableActions, acl, policyIds,
                          renditions)

    def _readStream(self, contentStream):
        if contentStream is None:
            return None
        return contentStream.getStream().read()


@zope.interface.implementer(IRepositoryService, IObjectService,
                            IVersioningService)
class FakeServices(object):
    """Fake CMIS services.
    """

    def __init__(self, repository):
        self.repository = repository

    def _record(self, name, *args):
        self.repository.calls.append((name, args))

    def _checkRepository(self, repositoryId):
        if repositoryId != self.repository.info.id:
            raise CmisObjectNotFoundException(repositoryId)
        return self.repository

    #
    # Repository service
    #

    def getRepositoryInfo(self, repositoryId):
        self._record('getRepositoryInfo', repositoryId)
        return self._checkRepository(repositoryId).info

    def getTypeDefinition(self, repositoryId, typeId):
        self._record('getTypeDefinition', repositoryId, typeId)
        repo = self._checkRepository(repositoryId)
        try:
            return repo.types[typeId]
        except KeyError:
            raise CmisObjectNotFoundException(typeId)

    #
    # Object service
    #

    def getObject(self, repositoryId, objectId, filter,
                  includeAllowableActions, includeRelationships,
                  renditionFilter, includePolicyIds, includeAcl):
        self._record('getObject', repositoryId, objectId, filter,
                     includeAllowableActions, includeRelationships,
                     renditionFilter, includePolicyIds, includeAcl)
        repo = self._checkRepository(repositoryId)
        return repo._objectData(repo._get(objectId), filter,
                                includeAllowableActions, renditionFilter,
                                includePolicyIds, includeAcl)

    def createDocument(self, repositoryId, properties, folderId,
                       contentStream, versioningState, policies, addAces,
                       removeAces):
        self._record('createDocument', repositoryId, properties, folderId,
                     contentStream, versioningState, policies, addAces,
                     removeAces)
        repo = self._checkRepository(repositoryId)
        if folderId is not None:
            repo._get(folderId)
        props = dict(properties)
        name = props.pop(P.NAME, None)
        typeId = props.pop(P.OBJECT_TYPE_ID, BaseTypeId.CMIS_DOCUMENT)
        if name is None:
            raise CmisConstraintException("Name is required")
        content = repo._readStream(contentStream)
        major = versioningState != VersioningState.MINOR
        id = repo.addDocument(name, typeId=typeId, properties=props,
                              major=major)
        if content is not None:
            repo._setContent(repo.data[id], content,
                             contentStream.getFileName(),
                             contentStream.getMimeType())
        return id

    def createDocumentFromSource(self, repositoryId, sourceId, properties,
                                 folderId, versioningState, policies,
                                 addAces, removeAces):
        self._record('createDocumentFromSource', repositoryId, sourceId,
                     properties, folderId, versioningState, policies,
                     addAces, removeAces)
        repo = self._checkRepository(repositoryId)
        if not repo.copySupported:
            raise CmisNotSupportedException("No server-side copy")
        source = repo._get(sourceId)
        props = dict(properties)
        name = props.pop(P.NAME, source.properties[P.NAME])
        id = repo.addDocument(name,
                              typeId=source.properties[P.OBJECT_TYPE_ID],
                              properties=props)
        repo._setContent(repo.data[id], source.content,
                         source.properties.get(P.CONTENT_STREAM_FILE_NAME),
                         source.properties.get(P.CONTENT_STREAM_MIME_TYPE))
        return id

    def setContentStream(self, repositoryId, objectId, contentStream,
                         overwrite, changeToken):
        self._record('setContentStream', repositoryId, objectId,
                     contentStream, overwrite, changeToken)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        repo._checkToken(obj, changeToken)
        if obj.content is not None and not overwrite:
            raise CmisContentAlreadyExistsException(objectId)
        content = repo._readStream(contentStream)
        fileName = contentStream.getFileName()
        mimeType = contentStream.getMimeType()
        if repo.versionOnContentChange:
            newId = repo._newVersion(obj, False)
            repo._setContent(repo.data[newId], content, fileName, mimeType)
            return repo._report(newId)
        repo._setContent(obj, content, fileName, mimeType)
        obj.properties[P.CHANGE_TOKEN] = repo.newToken()
        return repo._report(objectId)

    def appendContentStream(self, repositoryId, objectId, changeToken,
                            contentStream, isLastChunk):
        self._record('appendContentStream', repositoryId, objectId,
                     changeToken, contentStream, isLastChunk)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        repo._checkToken(obj, changeToken)
        content = (obj.content or b'') + repo._readStream(contentStream)
        props = obj.properties
        repo._setContent(obj, content,
                         props.get(P.CONTENT_STREAM_FILE_NAME) or
                         contentStream.getFileName(),
                         props.get(P.CONTENT_STREAM_MIME_TYPE) or
                         contentStream.getMimeType())
        props[P.CHANGE_TOKEN] = repo.newToken()
        return repo._report(objectId)

    def deleteContentStream(self, repositoryId, objectId, changeToken):
        self._record('deleteContentStream', repositoryId, objectId,
                     changeToken)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        repo._checkToken(obj, changeToken)
        if repo.versionOnContentChange:
            newId = repo._newVersion(obj, False)
            repo._setContent(repo.data[newId], None, None, None)
            return repo._report(newId)
        repo._setContent(obj, None, None, None)
        obj.properties[P.CHANGE_TOKEN] = repo.newToken()
        return repo._report(objectId)

    def getContentStream(self, repositoryId, objectId, streamId, offset,
                         length):
        self._record('getContentStream', repositoryId, objectId, streamId,
                     offset, length)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        if streamId is None:
            if obj.content is None:
                raise CmisConstraintException("No content")
            data = obj.content
            mimeType = obj.properties[P.CONTENT_STREAM_MIME_TYPE]
            fileName = obj.properties[P.CONTENT_STREAM_FILE_NAME]
        else:
            try:
                mimeType, data = obj.renditions[streamId]
            except KeyError:
                raise CmisConstraintException("No rendition %r" % streamId)
            fileName = None
        start = offset or 0
        if length is None:
            data = data[start:]
        else:
            data = data[start:start+length]
        return ContentStream(fileName, len(data), mimeType, BytesIO(data))

    def deleteObject(self, repositoryId, objectId, allVersions):
        self._record('deleteObject', repositoryId, objectId, allVersions)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        series = obj.properties.get(P.VERSION_SERIES_ID)
        if allVersions and series is not None:
            for version in repo._series(series):
                del repo.data[version.properties[P.OBJECT_ID]]
        else:
            del repo.data[objectId]

    #
    # Versioning service
    #

    def checkOut(self, repositoryId, objectId):
        self._record('checkOut', repositoryId, objectId)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        props = obj.properties
        if props[P.IS_VERSION_SERIES_CHECKED_OUT]:
            raise CmisVersioningException("Already checked out")
        pwcId = repo.newId('pwc')
        pwcProps = dict(props)
        pwcProps.update({
            P.OBJECT_ID: pwcId,
            P.CHANGE_TOKEN: repo.newToken(),
            P.IS_LATEST_VERSION: False,
            P.IS_MAJOR_VERSION: False,
            P.IS_LATEST_MAJOR_VERSION: False,
            P.IS_PRIVATE_WORKING_COPY: True,
            P.VERSION_LABEL: 'pwc',
            P.CHECKIN_COMMENT: None,
            })
        pwc = repo.data[pwcId] = FakeObject(pwcProps, obj.content,
                                            dict(obj.renditions))
        if pwc.content is not None:
            repo._setContent(pwc, pwc.content,
                             pwcProps.get(P.CONTENT_STREAM_FILE_NAME),
                             pwcProps.get(P.CONTENT_STREAM_MIME_TYPE))
        repo._setCheckedOut(props[P.VERSION_SERIES_ID], pwcId)
        return repo._report(pwcId)

    def cancelCheckOut(self, repositoryId, objectId):
        self._record('cancelCheckOut', repositoryId, objectId)
        repo = self._checkRepository(repositoryId)
        obj = repo._get(objectId)
        if not obj.properties[P.IS_PRIVATE_WORKING_COPY]:
            raise CmisVersioningException("Not a private working copy")
        del repo.data[objectId]
        repo._setCheckedOut(obj.properties[P.VERSION_SERIES_ID], None)

    def checkIn(self, repositoryId, objectId, major, properties,
                contentStream, checkinComment, policies, addAces,
                removeAces):
        self._record('checkIn', repositoryId, objectId, major, properties,
                     contentStream, checkinComment, policies, addAces,
                     removeAces)
        repo = self._checkRepository(repositoryId)
        pwc = repo._get(objectId)
        if not pwc.properties[P.IS_PRIVATE_WORKING_COPY]:
            raise CmisVersioningException("Not a private working copy")
        content = repo._readStream(contentStream)
        del repo.data[objectId]
        newId = repo._newVersion(pwc, major, properties, content,
                                 checkinComment)
        if content is not None:
            repo._setContent(repo.data[newId], content,
                             contentStream.getFileName(),
                             contentStream.getMimeType())
        repo._setCheckedOut(pwc.properties[P.VERSION_SERIES_ID], None)
        return repo._report(newId)

    def getAllVersions(self, repositoryId, objectId, versionSeriesId, filter,
                       includeAllowableActions):
        self._record('getAllVersions', repositoryId, objectId,
                     versionSeriesId, filter, includeAllowableActions)
        repo = self._checkRepository(repositoryId)
        if versionSeriesId is None:
            versionSeriesId = repo._get(objectId).properties[
                P.VERSION_SERIES_ID]
        return [repo._objectData(obj, filter, includeAllowableActions)
                for obj in repo._versions(versionSeriesId)]

    def getObjectOfLatestVersion(self, repositoryId, objectId,
                                 versionSeriesId, major, filter,
                                 includeAllowableActions,
                                 includeRelationships, renditionFilter,
                                 includePolicyIds, includeAcl):
        self._record('getObjectOfLatestVersion', repositoryId, objectId,
                     versionSeriesId, major, filter,
                     includeAllowableActions, includeRelationships,
                     renditionFilter, includePolicyIds, includeAcl)
        repo = self._checkRepository(repositoryId)
        if versionSeriesId is None:
            versionSeriesId = repo._get(objectId).properties[
                P.VERSION_SERIES_ID]
        if major:
            flag = P.IS_LATEST_MAJOR_VERSION
        else:
            flag = P.IS_LATEST_VERSION
        for obj in repo._versions(versionSeriesId):
            if obj.properties[flag]:
                return repo._objectData(obj, filter,
                                        includeAllowableActions,
                                        renditionFilter, includePolicyIds,
                                        includeAcl)
        raise CmisObjectNotFoundException(versionSeriesId)


@zope.interface.implementer(IRepositoryBinding)
class FakeBinding(object):
    """Fake CMIS binding, built by a session factory.
    """

    def __init__(self, factory):
        self.factory = factory
        self.repository = getRepository(factory.repository_id)
        self.services = FakeServices(self.repository)
        self.closed = False

    def getRepositoryService(self):
        return self.services

    def getObjectService(self):
        return self.services

    def getVersioningService(self):
        return self.services

    def close(self):
        self.closed = True


def openSession(repositoryId='test', **kw):
    """Open a session on a fake repository.

    Returns the repository and the session.
    """
    from nuxeo.cmis.factory import SessionFactory
    repository = getRepository(repositoryId, **kw)
    factory = SessionFactory(repositoryId, binding_class=FakeBinding)
    return repository, factory.open()
