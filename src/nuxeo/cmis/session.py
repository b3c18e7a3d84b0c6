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
"""CMIS Session

The session's dialogue with the repository is:

- at opening, get the repository info, which tells the protocol version
  and the capabilities,

- when an object is requested, fetch it with an operation context,
  unless it's already in the cache and was fetched with an equivalent
  context,

- when a ghost is accessed, fetch its state again with the context it
  was first fetched with.
"""

import time
import logging

from persistent import PickleCache
from ZODB.POSException import ConflictError
from ZODB.POSException import ConnectionStateError
import zope.interface

from nuxeo.cmis.interfaces import ISession
from nuxeo.cmis.interfaces import CmisConstraintException
from nuxeo.cmis.interfaces import CmisInvalidArgumentException
from nuxeo.cmis.interfaces import CmisNotSupportedException
from nuxeo.cmis.constants import CREATE_UPDATABILITY
from nuxeo.cmis.constants import Operations
from nuxeo.cmis.constants import PropertyIds
from nuxeo.cmis.data import ObjectId
from nuxeo.cmis.data import OperationContext
from nuxeo.cmis.impl import CmisObject
from nuxeo.cmis.impl import Document
from nuxeo.cmis.objectfactory import ObjectFactory


@zope.interface.implementer(ISession)
class Session(object):
    """CMIS Session.

    Lifecycle of a proxy
    --------------------

    A proxy starts its life when an object is fetched, through
    getObject() or as the result of a versioning query. It gets the
    session as ``_p_jar`` and its encoded id as ``_p_oid``, and is put
    in the cache unless its operation context disables caching.

    A cached proxy can be turned into a ghost by a cache reduction. At
    its next access it is refetched through setstate(obj), using the
    context it was created with.

    A refresh fetches the state first, then replaces the proxy's state
    in place, so that a failed fetch leaves the proxy untouched.

    Operations retiring an id on the repository side (checkin, cancel
    checkout, delete) remove the proxy from the cache. Holders of the
    proxy keep seeing its last known state.
    """

    def __init__(self, factory, cache_size=1000):

        self._log = logging.getLogger('nuxeo.cmis.session')

        self._factory = factory
        self.repositoryId = factory.repository_id

        binding = factory.binding_class(factory)
        self.binding = binding
        self._repositoryInfo = binding.getRepositoryService(
            ).getRepositoryInfo(self.repositoryId)

        self._objectFactory = ObjectFactory(self)
        self._defaultContext = OperationContext()

        # Cache of proxies
        self._cache = PickleCache(self, cache_size)

        # Mapping of oid to the creation context of cached proxies,
        # used to reload ghosts
        self._contexts = {}

        # States loaded but that have to wait for a persistent setstate()
        # call to be put in their apropriate object. Removed after set.
        self._pending_states = {}

        self._opened = time.time()

    def close(self):
        """Close the session and its binding.
        """
        if self._opened is None:
            raise ConnectionStateError("Session already closed")
        self.cacheGC()
        self.binding.close()
        self._opened = None

    def cacheGC(self):
        """Reduce cache size to target size.
        """
        self._cache.incrgc()
        self._pruneContexts()

    def _pruneContexts(self):
        # Ghosts freed by the cache don't need their context anymore
        cache = self._cache
        for oid in list(self._contexts):
            if cache.get(oid) is None:
                del self._contexts[oid]

    ##################################################
    # Repository

    def getRepositoryInfo(self):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return self._repositoryInfo

    def isSupported(self, operation):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return self._repositoryInfo.supports(operation)

    def getTypeDefinition(self, typeId):
        """Get the definition of a type.
        """
        return self._factory.getTypeManager().getTypeDefinition(
            self.binding, self.repositoryId, typeId)

    def getObjectFactory(self):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return self._objectFactory

    def getDefaultContext(self):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return self._defaultContext

    def setDefaultContext(self, context):
        self._defaultContext = context

    def createOperationContext(self, **kw):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return OperationContext(**kw)

    def createObjectId(self, id):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        return ObjectId(id)

    ##################################################
    # Load

    def getObject(self, objectId, context=None):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        id = self._getId(objectId)
        if context is None:
            context = self._defaultContext
        oid = self._getOid(id)

        if context.isCacheEnabled():
            obj = self._cache.get(oid)
            if obj is not None:
                cached = self._contexts.get(oid)
                if (cached is not None and
                    cached.getCacheKey() == context.getCacheKey()):
                    return obj

        objectData = self._fetch(id, context)
        return self.loadObject(objectData, context)

    __getitem__ = getObject

    def loadObject(self, objectData, context):
        """Get a proxy for an `ObjectData` sent by the repository.

        A proxy cached with an equivalent context gets the new state,
        otherwise a new proxy replaces it in the cache.
        """
        oid = self._getOid(objectData.getId())
        factory = self._objectFactory

        if context.isCacheEnabled():
            obj = self._cache.get(oid)
            cached = self._contexts.get(oid)
            if (obj is not None and cached is not None and
                cached.getCacheKey() == context.getCacheKey()):
                state = factory.convertObjectState(objectData, context)
                self._replaceState(obj, state)
                return obj

        obj = factory.convertObject(objectData, context)
        obj._p_oid = oid
        obj._p_jar = self
        if context.isCacheEnabled():
            self._cacheObject(oid, obj, context)
        return obj

    def _cacheObject(self, oid, obj, context):
        old = self._cache.get(oid)
        if old is not obj:
            if old is not None:
                del self._cache[oid]
            self._cache[oid] = obj
        self._contexts[oid] = context

    def removeObjectFromCache(self, objectId):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        id = self._getId(objectId)
        oid = self._getOid(id)
        if self._cache.get(oid) is not None:
            del self._cache[oid]
            self._log.debug("Removed %s from cache", id)
        self._contexts.pop(oid, None)
        self._pending_states.pop(oid, None)

    def isCached(self, objectId):
        """Tell if a proxy for an object id is in the cache.
        """
        return self._cache.get(self._getOid(self._getId(objectId))) is not None

    def refresh(self, obj):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        assert obj._p_jar is self
        if obj._p_changed is None:
            # Ghost passed directly, loading it fetches a fresh state
            obj._p_activate()
            return
        context = obj.getCreationContext()
        objectData = self._fetch(obj.getId(), context)
        state = self._objectFactory.convertObjectState(objectData, context)
        self._replaceState(obj, state)

    def _replaceState(self, obj, state):
        self._pending_states[obj._p_oid] = state
        obj._p_invalidate()
        obj._p_activate()

    def setstate(self, obj):
        """Set the state on an object.

        This fills a ghost object with its proper state.

        Called by the persistence machinery to unghostifiy an object.
        """
        oid = obj._p_oid
        if self._opened is None:
            msg = ("Shouldn't load state for %s "
                   "when the session is closed" % oid)
            self._log.error(msg)
            raise ConnectionStateError(msg)
        try:
            self._setstate(obj)
        except ConflictError:
            raise
        except Exception:
            self._log.error("Couldn't load state for %s", oid,
                            exc_info=True)
            raise

    def _setstate(self, obj):
        oid = obj._p_oid
        if oid in self._pending_states:
            # State was already fetched, by a refresh.
            state = self._pending_states.pop(oid)
        else:
            context = self._contexts.get(oid, self._defaultContext)
            objectData = self._fetch(oid.decode('utf-8'), context)
            state = self._objectFactory.convertObjectState(objectData,
                                                           context)
        obj.__setstate__(state)

    def register(self, obj):
        """Called by the persistence machinery when a proxy's state
        changes.

        Proxies are only changed through the binding, so this flags an
        illegal direct modification.
        """
        self._log.warning("Illegal direct modification of %r", obj)

    def _fetch(self, id, context):
        self._log.debug("Fetching %s with %r", id, context)
        return self.binding.getObjectService().getObject(
            self.repositoryId,
            id,
            context.getQueryFilterString(),
            context.isIncludeAllowableActions(),
            context.getIncludeRelationships(),
            context.getRenditionFilterString(),
            context.isIncludePolicies(),
            context.isIncludeAcls())

    def _getId(self, objectId):
        """Get an id string from a proxy, an ObjectId or a string.
        """
        if isinstance(objectId, CmisObject):
            oid = objectId._p_oid
            if oid is None:
                raise CmisInvalidArgumentException(
                    "Object %r has no id" % (objectId,))
            return oid.decode('utf-8')
        if isinstance(objectId, ObjectId):
            return objectId.getId()
        return ObjectId(objectId).getId()

    def _getOid(self, id):
        return id.encode('utf-8')

    ##################################################
    # Content

    def getContentStream(self, document, streamId=None, offset=None,
                         length=None):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        id = self._getId(document)
        try:
            return self.binding.getObjectService().getContentStream(
                self.repositoryId, id, streamId, offset, length)
        except CmisConstraintException:
            # No content
            self._log.debug("No content stream %s for %s", streamId, id)
            return None

    ##################################################
    # Create

    def createDocument(self, properties, folderId, contentStream,
                       versioningState, policies=(), addAces=(),
                       removeAces=()):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        if not properties:
            raise CmisInvalidArgumentException("Properties must not be empty")
        factory = self._objectFactory
        secondaryTypes = [self.getTypeDefinition(typeId) for typeId in
                          properties.get(PropertyIds.SECONDARY_OBJECT_TYPE_IDS)
                          or ()]

        newObjectId = self.binding.getObjectService().createDocument(
            self.repositoryId,
            factory.convertProperties(properties, None, secondaryTypes,
                                      CREATE_UPDATABILITY),
            self._getFolderId(folderId),
            factory.convertContentStream(contentStream),
            versioningState,
            factory.convertPolicies(policies),
            factory.convertAces(addAces),
            factory.convertAces(removeAces))

        if newObjectId is None:
            return None
        return self.createObjectId(newObjectId)

    def createDocumentFromSource(self, source, properties, folderId,
                                 versioningState, policies=(), addAces=(),
                                 removeAces=()):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        if not self.isSupported(Operations.CREATE_DOCUMENT_FROM_SOURCE):
            raise CmisNotSupportedException(
                "createDocumentFromSource is not supported by repository %s"
                % self.repositoryId)
        if not isinstance(source, Document):
            source = self.getObject(source)
            if not isinstance(source, Document):
                raise CmisInvalidArgumentException(
                    "Source %r is not a document" % (source,))
        factory = self._objectFactory

        newObjectId = self.binding.getObjectService().createDocumentFromSource(
            self.repositoryId,
            source.getId(),
            factory.convertProperties(properties, source.getObjectType(),
                                      source.getSecondaryTypes(),
                                      CREATE_UPDATABILITY),
            self._getFolderId(folderId),
            versioningState,
            factory.convertPolicies(policies),
            factory.convertAces(addAces),
            factory.convertAces(removeAces))

        if newObjectId is None:
            return None
        return self.createObjectId(newObjectId)

    def _getFolderId(self, folderId):
        # None means unfiled
        if folderId is None:
            return None
        return self._getId(folderId)

    ##################################################
    # Versioning

    def getLatestDocumentVersion(self, objectId, major=False, context=None):
        """See `nuxeo.cmis.interfaces.ISession`
        """
        if context is None:
            context = self._defaultContext
        versionSeriesId = None
        if isinstance(objectId, Document):
            versionSeriesId = objectId.getVersionSeriesId()
        id = self._getId(objectId)

        objectData = self.binding.getVersioningService(
            ).getObjectOfLatestVersion(
            self.repositoryId,
            id,
            versionSeriesId,
            major,
            context.getQueryFilterString(),
            context.isIncludeAllowableActions(),
            context.getIncludeRelationships(),
            context.getRenditionFilterString(),
            context.isIncludePolicies(),
            context.isIncludeAcls())
        return self.loadObject(objectData, context)
