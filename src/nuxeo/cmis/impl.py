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
"""CMIS object proxies.

A proxy is a persistent object whose ``_p_jar`` is the session it
belongs to and whose ``_p_oid`` is its encoded object id. Its state is
what the repository sent at the last fetch or refresh; it is never
modified locally, all changes go through the binding.
"""

import logging
from persistent import Persistent
import zope.interface

from nuxeo.cmis.interfaces import IDocument
from nuxeo.cmis.interfaces import CmisNotSupportedException
from nuxeo.cmis.constants import CHECKIN_UPDATABILITY
from nuxeo.cmis.constants import RENDITION_NONE
from nuxeo.cmis.constants import IncludeRelationships
from nuxeo.cmis.constants import Operations
from nuxeo.cmis.constants import PropertyIds
from nuxeo.cmis.constants import Updatability
from nuxeo.cmis.data import ContentStreamHash


logger = logging.getLogger('nuxeo.cmis.impl')


class CmisObject(Persistent):
    """Base proxy.
    """

    def getSession(self):
        return self._p_jar

    def getBinding(self):
        return self._p_jar.binding

    def getObjectFactory(self):
        return self._p_jar.getObjectFactory()

    def getRepositoryId(self):
        return self._p_jar.repositoryId

    def getId(self):
        return self.getPropertyValue(PropertyIds.OBJECT_ID)

    def getName(self):
        return self.getPropertyValue(PropertyIds.NAME)

    def getChangeToken(self):
        return self.getPropertyValue(PropertyIds.CHANGE_TOKEN)

    def getBaseTypeId(self):
        return self.getPropertyValue(PropertyIds.BASE_TYPE_ID)

    def getObjectType(self):
        return self._type

    def getSecondaryTypes(self):
        return list(self._secondaryTypes)

    def getProperty(self, id):
        """Get a `Property`, or None if it hasn't been fetched.
        """
        return self._properties.get(id)

    def getProperties(self):
        return list(self._properties.values())

    def getPropertyValue(self, id):
        """Get the value of a property.

        Returns None if the property hasn't been requested, hasn't been
        provided by the repository, or isn't set.
        """
        prop = self._properties.get(id)
        if prop is None:
            return None
        return prop.getValue()

    def getCreationContext(self):
        """Get the operation context used to fetch this object.
        """
        return self._creationContext

    def getAllowableActions(self):
        return self._allowableActions

    def getAcl(self):
        return self._acl

    def getPolicyIds(self):
        return self._policyIds

    def getRenditions(self):
        return self._renditions

    def getRefreshTimestamp(self):
        return self._refreshTimestamp

    def refresh(self):
        """Reload from the repository, using the creation context.
        """
        self._p_jar.refresh(self)

    def delete(self, allVersions=True):
        self.getBinding().getObjectService().deleteObject(
            self.getRepositoryId(), self.getId(), allVersions)
        self._p_jar.removeObjectFromCache(self)

    def __repr__(self):
        oid = self._p_oid
        if oid is not None:
            oid = oid.decode('utf-8')
        return '<%s %s>' % (self.__class__.__name__, oid)


class FileableCmisObject(CmisObject):
    """Proxy for objects that can be filed in folders.
    """


class Folder(FileableCmisObject):
    """Folder proxy.
    """

    def getParentId(self):
        return self.getPropertyValue(PropertyIds.PARENT_ID)

    def getPath(self):
        return self.getPropertyValue(PropertyIds.PATH)

    def createDocument(self, properties, contentStream, versioningState,
                       policies=(), addAces=(), removeAces=()):
        """Create a document in this folder.

        Returns the `ObjectId` of the new document, or None.
        """
        return self._p_jar.createDocument(
            properties, self, contentStream, versioningState,
            policies, addAces, removeAces)


class Policy(FileableCmisObject):
    """Policy proxy.
    """

    def getPolicyText(self):
        return self.getPropertyValue(PropertyIds.POLICY_TEXT)


@zope.interface.implementer(IDocument)
class Document(FileableCmisObject):
    """Document proxy.

    Content changes and versioning operations may create new objects
    in the repository. They return the id the repository reported,
    resolved through the session, and never update this proxy to
    represent another object.
    """

    #
    # Content stream
    #

    def setContentStream(self, contentStream, overwrite, refresh=True):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        session = self._p_jar
        objectId = self.getId()
        changeToken = self.getChangeToken()

        newObjectId = self.getBinding().getObjectService().setContentStream(
            self.getRepositoryId(),
            objectId,
            self.getObjectFactory().convertContentStream(contentStream),
            overwrite,
            changeToken)

        if refresh:
            self.refresh()

        if newObjectId is None:
            return None
        return session.createObjectId(newObjectId)

    def appendContentStream(self, contentStream, isLastChunk, refresh=True):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        session = self._p_jar
        if not session.isSupported(Operations.APPEND_CONTENT_STREAM):
            raise CmisNotSupportedException(
                "appendContentStream is not supported by repository %s"
                % self.getRepositoryId())

        objectId = self.getId()
        changeToken = self.getChangeToken()

        newObjectId = self.getBinding().getObjectService().appendContentStream(
            self.getRepositoryId(),
            objectId,
            changeToken,
            self.getObjectFactory().convertContentStream(contentStream),
            isLastChunk)

        if refresh:
            self.refresh()

        if newObjectId is None:
            return None
        return session.createObjectId(newObjectId)

    def deleteContentStream(self, refresh=True):
        """See `nuxeo.cmis.interfaces.IDocument`

        Unlike the other content operations, the document itself is
        returned, fetched with this proxy's creation context.
        """
        session = self._p_jar
        objectId = self.getId()
        changeToken = self.getChangeToken()
        context = self.getCreationContext()

        newObjectId = self.getBinding().getObjectService().deleteContentStream(
            self.getRepositoryId(),
            objectId,
            changeToken)

        if refresh:
            self.refresh()

        if newObjectId is None:
            return None
        return session.getObject(session.createObjectId(newObjectId), context)

    def getContentStream(self, streamId=None, offset=None, length=None):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        return self._p_jar.getContentStream(self, streamId, offset, length)

    #
    # Versioning
    #

    def checkOut(self):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        session = self._p_jar
        newObjectId = self.getBinding().getVersioningService().checkOut(
            self.getRepositoryId(), self.getId())
        if newObjectId is None:
            return None
        return session.createObjectId(newObjectId)

    def cancelCheckOut(self):
        """See `nuxeo.cmis.interfaces.IDocument`

        Only valid on a private working copy, which is not checked here.
        """
        self.getBinding().getVersioningService().cancelCheckOut(
            self.getRepositoryId(), self.getId())
        # The PWC doesn't exist anymore
        self._p_jar.removeObjectFromCache(self)

    def checkIn(self, major, properties, contentStream, checkinComment,
                policies=(), addAces=(), removeAces=()):
        """See `nuxeo.cmis.interfaces.IDocument`

        Only valid on a private working copy, which is not checked here.
        """
        session = self._p_jar
        factory = self.getObjectFactory()

        newObjectId = self.getBinding().getVersioningService().checkIn(
            self.getRepositoryId(),
            self.getId(),
            major,
            factory.convertProperties(properties, self.getObjectType(),
                                      self.getSecondaryTypes(),
                                      CHECKIN_UPDATABILITY),
            factory.convertContentStream(contentStream),
            checkinComment,
            factory.convertPolicies(policies),
            factory.convertAces(addAces),
            factory.convertAces(removeAces))

        # The PWC doesn't exist anymore
        session.removeObjectFromCache(self)

        if newObjectId is None:
            return None
        return session.createObjectId(newObjectId)

    def getAllVersions(self, context=None):
        """See `nuxeo.cmis.interfaces.IDocument`

        The result is undefined for non-versionable documents.
        """
        session = self._p_jar
        if context is None:
            context = session.getDefaultContext()
        versions = self.getBinding().getVersioningService().getAllVersions(
            self.getRepositoryId(),
            self.getId(),
            self.getVersionSeriesId(),
            context.getQueryFilterString(),
            context.isIncludeAllowableActions())
        result = []
        for objectData in versions or ():
            obj = session.loadObject(objectData, context)
            if isinstance(obj, Document):
                result.append(obj)
            else:
                logger.warning("Version %r of %s is not a document",
                               objectData.getId(), self.getId())
        return result

    def getObjectOfLatestVersion(self, major, context=None):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        return self._p_jar.getLatestDocumentVersion(self, major, context)

    def deleteAllVersions(self):
        """See `nuxeo.cmis.interfaces.IDocument`
        """
        self.delete(True)

    #
    # Copy
    #

    def copy(self, targetFolderId, properties=None, versioningState=None,
             policies=(), addAces=(), removeAces=(), context=None):
        """See `nuxeo.cmis.interfaces.IDocument`

        The repository copies the document if it can, otherwise the
        content is streamed from the repository and back.

        Returns the new document fetched with `context`, or None if
        `context` is None or if no id was reported.
        """
        if properties is None:
            properties = {}
        try:
            newObjectId = self._p_jar.createDocumentFromSource(
                self, properties, targetFolderId, versioningState,
                policies, addAces, removeAces)
        except CmisNotSupportedException:
            logger.debug("Server-side copy of %s not supported, copying "
                         "through the client", self.getId())
            newObjectId = self.copyViaClient(
                targetFolderId, properties, versioningState,
                policies, addAces, removeAces)
        return self._getNewlyCreatedObject(newObjectId, context)

    def copyViaClient(self, targetFolderId, properties=None,
                      versioningState=None, policies=(), addAces=(),
                      removeAces=()):
        """Copy the document by streaming its content through the client.

        Returns the `ObjectId` of the new document.
        """
        session = self._p_jar
        allPropertiesContext = session.createOperationContext(
            filter=['*'],
            includeAcls=False,
            includeAllowableActions=False,
            includePathSegments=False,
            includePolicies=False,
            includeRelationships=IncludeRelationships.NONE,
            renditionFilter=RENDITION_NONE,
            cacheEnabled=False)
        snapshot = session.getObject(self, allPropertiesContext)

        newProperties = {}
        for prop in snapshot.getProperties():
            updatability = prop.getDefinition().updatability
            if updatability in (Updatability.READWRITE,
                                Updatability.ONCREATE):
                newProperties[prop.getId()] = prop.getValue()
        newProperties.update(properties or {})

        contentStream = snapshot.getContentStream()

        return session.createDocument(
            newProperties, targetFolderId, contentStream, versioningState,
            policies, addAces, removeAces)

    def _getNewlyCreatedObject(self, newObjectId, context):
        # No context means no fetch
        if context is None or newObjectId is None:
            return None
        return self._p_jar.getObject(newObjectId, context)

    #
    # Properties
    #

    def getCheckinComment(self):
        return self.getPropertyValue(PropertyIds.CHECKIN_COMMENT)

    def getContentStreamFileName(self):
        return self.getPropertyValue(PropertyIds.CONTENT_STREAM_FILE_NAME)

    def getContentStreamMimeType(self):
        return self.getPropertyValue(PropertyIds.CONTENT_STREAM_MIME_TYPE)

    def getContentStreamLength(self):
        return self.getPropertyValue(PropertyIds.CONTENT_STREAM_LENGTH)

    def getContentStreamId(self):
        return self.getPropertyValue(PropertyIds.CONTENT_STREAM_ID)

    def getContentStreamHashes(self):
        """Get the content hashes, or None if the document has no content
        or they haven't been fetched.
        """
        prop = self.getProperty(PropertyIds.CONTENT_STREAM_HASH)
        if prop is None:
            return None
        values = prop.getValues()
        if not values:
            return None
        return [ContentStreamHash(value) for value in values]

    def getVersionLabel(self):
        return self.getPropertyValue(PropertyIds.VERSION_LABEL)

    def getVersionSeriesId(self):
        return self.getPropertyValue(PropertyIds.VERSION_SERIES_ID)

    def getVersionSeriesCheckedOutBy(self):
        return self.getPropertyValue(PropertyIds.VERSION_SERIES_CHECKED_OUT_BY)

    def getVersionSeriesCheckedOutId(self):
        return self.getPropertyValue(PropertyIds.VERSION_SERIES_CHECKED_OUT_ID)

    def isImmutable(self):
        return self.getPropertyValue(PropertyIds.IS_IMMUTABLE)

    def isLatestVersion(self):
        return self.getPropertyValue(PropertyIds.IS_LATEST_VERSION)

    def isLatestMajorVersion(self):
        return self.getPropertyValue(PropertyIds.IS_LATEST_MAJOR_VERSION)

    def isMajorVersion(self):
        return self.getPropertyValue(PropertyIds.IS_MAJOR_VERSION)

    def isPrivateWorkingCopy(self):
        return self.getPropertyValue(PropertyIds.IS_PRIVATE_WORKING_COPY)

    def isVersionSeriesCheckedOut(self):
        return self.getPropertyValue(PropertyIds.IS_VERSION_SERIES_CHECKED_OUT)
