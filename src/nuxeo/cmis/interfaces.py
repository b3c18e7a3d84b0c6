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
"""CMIS client interfaces.
"""

from zope.interface import Interface
from zope.interface import Attribute
from ZODB.POSException import ConflictError
from ZODB.POSException import ConnectionStateError # for reimport


class CmisBaseException(Exception):
    """Base class of all CMIS errors.
    """


class CmisRuntimeException(CmisBaseException):
    pass


class CmisNotSupportedException(CmisBaseException):
    """The repository or its protocol version lacks an operation.
    """


class CmisInvalidArgumentException(CmisBaseException, ValueError):
    pass


class CmisObjectNotFoundException(CmisBaseException):
    pass


class CmisConstraintException(CmisBaseException):
    pass


class CmisContentAlreadyExistsException(CmisBaseException):
    """Content already exists and overwrite was not requested.
    """


class CmisVersioningException(CmisBaseException):
    pass


class CmisUpdateConflictException(CmisBaseException, ConflictError):
    """The change token sent is not the current one.
    """


class IContentStream(Interface):
    """A readable byte stream with some metadata.
    """

    def getFileName():
        """Return the file name, or None.
        """

    def getLength():
        """Return the length in bytes, or None if unknown.
        """

    def getMimeType():
        """Return the MIME type.
        """

    def getStream():
        """Return the underlying file-like object.
        """


class IOperationContext(Interface):
    """What a fetch of an object includes.
    """

    def getFilter():
        """Return the set of requested property query names.

        ``set(['*'])`` means all properties.
        """

    def getFilterString():
        """Return the filter as a comma-separated string, or None.
        """

    def getQueryFilterString():
        """Return the filter string to send to the repository.

        The properties the client needs to build a proxy are always
        added to a restricted filter.
        """

    def isIncludeAcls():
        """Return True if ACLs are fetched.
        """

    def isIncludeAllowableActions():
        """Return True if allowable actions are fetched.
        """

    def isIncludePathSegments():
        """Return True if path segments are fetched.
        """

    def isIncludePolicies():
        """Return True if policy ids are fetched.
        """

    def getIncludeRelationships():
        """Return which relationships are fetched.
        """

    def getRenditionFilterString():
        """Return the rendition filter.
        """

    def isCacheEnabled():
        """Return True if objects fetched with this context are cached.
        """

    def getCacheKey():
        """Return a string identifying what this context fetches.
        """


class IRepositoryService(Interface):
    """Repository-level remote operations.
    """

    def getRepositoryInfo(repositoryId):
        """Get the description of a repository.

        Returns a `RepositoryInfo`.
        """

    def getTypeDefinition(repositoryId, typeId):
        """Get the definition of a type.

        Returns an `ObjectType`. Raises CmisObjectNotFoundException if
        there's no such type.
        """


class IObjectService(Interface):
    """Remote operations on objects.

    Operations changing content report the id of the object after the
    change as their return value. Some repositories create a new
    version when content changes, so this may be a different id than
    the one passed. None means that the repository did not report an
    id, which is not an error.
    """

    def getObject(repositoryId, objectId, filter, includeAllowableActions,
                  includeRelationships, renditionFilter, includePolicyIds,
                  includeAcl):
        """Get an object.

        Returns an `ObjectData`. Raises CmisObjectNotFoundException if
        there's no such object.
        """

    def createDocument(repositoryId, properties, folderId, contentStream,
                       versioningState, policies, addAces, removeAces):
        """Create a document.

        Returns the id of the new document.
        """

    def createDocumentFromSource(repositoryId, sourceId, properties,
                                 folderId, versioningState, policies,
                                 addAces, removeAces):
        """Create a document as a copy of another one.

        Returns the id of the new document. Raises
        CmisNotSupportedException if the binding can't do it.
        """

    def setContentStream(repositoryId, objectId, contentStream, overwrite,
                         changeToken):
        """Set the content of a document.

        Raises CmisContentAlreadyExistsException if the document
        already has content and `overwrite` is false.

        Returns the new object id, or None.
        """

    def appendContentStream(repositoryId, objectId, changeToken,
                            contentStream, isLastChunk):
        """Append to the content of a document.

        Returns the new object id, or None.
        """

    def deleteContentStream(repositoryId, objectId, changeToken):
        """Remove the content of a document.

        Returns the new object id, or None.
        """

    def getContentStream(repositoryId, objectId, streamId, offset, length):
        """Get the content of a document, or of one of its renditions.

        `offset` and `length` restrict the returned range, None meaning
        from the start and to the end.

        Raises CmisConstraintException if the document has no content.
        """

    def deleteObject(repositoryId, objectId, allVersions):
        """Delete an object, and all its versions if requested.
        """


class IVersioningService(Interface):
    """Remote operations on version series.
    """

    def checkOut(repositoryId, objectId):
        """Check out a document.

        Returns the id of the private working copy, or None.
        """

    def cancelCheckOut(repositoryId, objectId):
        """Discard a private working copy.
        """

    def checkIn(repositoryId, objectId, major, properties, contentStream,
                checkinComment, policies, addAces, removeAces):
        """Check in a private working copy.

        Returns the id of the new version, or None.
        """

    def getAllVersions(repositoryId, objectId, versionSeriesId, filter,
                       includeAllowableActions):
        """Get all the versions of a version series.

        Returns a list of `ObjectData`, latest first.
        """

    def getObjectOfLatestVersion(repositoryId, objectId, versionSeriesId,
                                 major, filter, includeAllowableActions,
                                 includeRelationships, renditionFilter,
                                 includePolicyIds, includeAcl):
        """Get the latest version of a version series.

        Returns an `ObjectData`.
        """


class IRepositoryBinding(Interface):
    """Access to the remote services of a repository.

    All calls are synchronous.
    """

    def getRepositoryService():
        """Return the `IRepositoryService`.
        """

    def getObjectService():
        """Return the `IObjectService`.
        """

    def getVersioningService():
        """Return the `IVersioningService`.
        """

    def close():
        """Release the resources held by the binding.
        """


class IObjectFactory(Interface):
    """Conversions between local values and wire values.
    """

    def convertProperties(properties, objectType, secondaryTypes,
                          updatabilityFilter):
        """Convert a mapping of property id to value for sending.

        Properties unknown to the types, or whose updatability is not
        in `updatabilityFilter`, are rejected.
        """

    def convertContentStream(contentStream):
        """Convert a content stream for sending.
        """

    def convertPolicies(policies):
        """Convert policies or policy ids to a list of ids.
        """

    def convertAces(aces):
        """Convert a list of ACEs for sending, or None if empty.
        """

    def convertObject(objectData, context):
        """Build a proxy from an `ObjectData`.
        """


class ISession(Interface):
    """A session with a repository.

    Owns the cache of proxies, keyed by object id.
    """

    binding = Attribute("The `IRepositoryBinding`")

    def getRepositoryInfo():
        """Return the `RepositoryInfo` of the repository.
        """

    def isSupported(operation):
        """Tell if the repository supports a given operation.
        """

    def getObjectFactory():
        """Return the `IObjectFactory`.
        """

    def getDefaultContext():
        """Return the default `IOperationContext`.
        """

    def createOperationContext(**kw):
        """Create a new `IOperationContext`.
        """

    def createObjectId(id):
        """Create an `ObjectId`.
        """

    def getObject(objectId, context=None):
        """Get the proxy for an object id.

        Returns the cached proxy if it was fetched with an equivalent
        context, otherwise fetches it.
        """

    def removeObjectFromCache(objectId):
        """Remove an object from the cache.
        """

    def getContentStream(document, streamId=None, offset=None, length=None):
        """Get the content of a document, or None if it has none.
        """

    def createDocument(properties, folderId, contentStream, versioningState,
                       policies=(), addAces=(), removeAces=()):
        """Create a document. Returns its `ObjectId`.
        """

    def createDocumentFromSource(source, properties, folderId,
                                 versioningState, policies=(), addAces=(),
                                 removeAces=()):
        """Create a document as a copy of another one.

        Returns its `ObjectId`. Raises CmisNotSupportedException if the
        repository can't do it.
        """

    def getLatestDocumentVersion(objectId, major=False, context=None):
        """Get the latest version of the version series of a document.
        """

    def refresh(obj):
        """Reload the state of a proxy from the repository.
        """


class IDocument(Interface):
    """A document proxy.
    """

    def setContentStream(contentStream, overwrite, refresh=True):
        """Replace the content.

        Returns the id of the object after the change, or None.
        """

    def appendContentStream(contentStream, isLastChunk, refresh=True):
        """Append to the content.

        Raises CmisNotSupportedException on CMIS 1.0 repositories.

        Returns the id of the object after the change, or None.
        """

    def deleteContentStream(refresh=True):
        """Remove the content.

        Returns the document after the change, or None.
        """

    def getContentStream(streamId=None, offset=None, length=None):
        """Get the content, or the content of a rendition.
        """

    def checkOut():
        """Check out. Returns the id of the private working copy, or None.
        """

    def cancelCheckOut():
        """Discard this private working copy.
        """

    def checkIn(major, properties, contentStream, checkinComment,
                policies=(), addAces=(), removeAces=()):
        """Check in this private working copy.

        Returns the id of the new version, or None.
        """

    def copy(targetFolderId, properties=None, versioningState=None,
             policies=(), addAces=(), removeAces=(), context=None):
        """Copy this document with its content.
        """

    def getAllVersions(context=None):
        """Return all the documents of the version series.
        """

    def getObjectOfLatestVersion(major, context=None):
        """Return the latest (major) version of the version series.
        """

    def deleteAllVersions():
        """Delete the whole version series.
        """
