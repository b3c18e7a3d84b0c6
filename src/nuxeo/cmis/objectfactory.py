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
"""CMIS object factory.

Converts between what the client manipulates (proxies, mappings of
property values, policies) and what the binding sends and receives.
"""

import time
import zope.interface

from nuxeo.cmis.interfaces import IObjectFactory
from nuxeo.cmis.interfaces import CmisInvalidArgumentException
from nuxeo.cmis.interfaces import CmisRuntimeException
from nuxeo.cmis.constants import BaseTypeId
from nuxeo.cmis.constants import Cardinality
from nuxeo.cmis.constants import PropertyIds
from nuxeo.cmis.data import ContentStream
from nuxeo.cmis.data import ObjectId
from nuxeo.cmis.data import Property
from nuxeo.cmis.impl import CmisObject
from nuxeo.cmis.impl import Document
from nuxeo.cmis.impl import Folder
from nuxeo.cmis.impl import Policy


@zope.interface.implementer(IObjectFactory)
class ObjectFactory(object):
    """Object factory of a session.
    """

    classes = {
        BaseTypeId.CMIS_DOCUMENT: Document,
        BaseTypeId.CMIS_FOLDER: Folder,
        BaseTypeId.CMIS_POLICY: Policy,
        }

    def __init__(self, session):
        self._session = session

    def getClass(self, baseTypeId):
        """Get the proxy class for a base type.
        """
        return self.classes.get(baseTypeId, CmisObject)

    #
    # Local -> wire
    #

    def convertProperties(self, properties, objectType, secondaryTypes=(),
                          updatabilityFilter=None):
        """See `nuxeo.cmis.interfaces.IObjectFactory`
        """
        if properties is None:
            return None
        if objectType is None:
            typeId = properties.get(PropertyIds.OBJECT_TYPE_ID)
            if typeId is None:
                raise CmisInvalidArgumentException(
                    "Property %s must be set" % PropertyIds.OBJECT_TYPE_ID)
            objectType = self._session.getTypeDefinition(typeId)
        if secondaryTypes is None:
            secondaryTypes = ()
        types = [objectType] + list(secondaryTypes)

        result = {}
        for id, value in properties.items():
            definition = None
            for t in types:
                definition = t.getPropertyDefinition(id)
                if definition is not None:
                    break
            if definition is None:
                raise CmisInvalidArgumentException(
                    "Property %r is not valid for type %s" %
                    (id, objectType.id))
            if (updatabilityFilter is not None and
                definition.updatability not in updatabilityFilter):
                raise CmisInvalidArgumentException(
                    "Property %r is %s and can't be set here" %
                    (id, definition.updatability))
            if definition.cardinality == Cardinality.MULTI:
                if value is None:
                    value = []
                elif not isinstance(value, (list, tuple)):
                    raise CmisInvalidArgumentException(
                        "Property %r is multi-valued" % id)
                value = list(value)
            elif isinstance(value, (list, tuple)):
                raise CmisInvalidArgumentException(
                    "Property %r is single-valued" % id)
            result[id] = value
        return result

    def convertContentStream(self, contentStream):
        """See `nuxeo.cmis.interfaces.IObjectFactory`
        """
        if contentStream is None:
            return None
        return ContentStream(contentStream.getFileName(),
                             contentStream.getLength(),
                             contentStream.getMimeType(),
                             contentStream.getStream())

    def convertPolicies(self, policies):
        """See `nuxeo.cmis.interfaces.IObjectFactory`
        """
        ids = []
        for policy in policies or ():
            if isinstance(policy, CmisObject):
                ids.append(policy.getId())
            elif isinstance(policy, ObjectId):
                ids.append(policy.getId())
            else:
                ids.append(policy)
        return ids

    def convertAces(self, aces):
        """See `nuxeo.cmis.interfaces.IObjectFactory`
        """
        if not aces:
            return None
        return list(aces)

    #
    # Wire -> local
    #

    def convertObjectState(self, objectData, context):
        """Build the state of a proxy from an `ObjectData`.
        """
        values = objectData.properties
        typeId = values.get(PropertyIds.OBJECT_TYPE_ID)
        if typeId is None:
            raise CmisRuntimeException("Object %r has no type" %
                                       objectData.getId())
        objectType = self._session.getTypeDefinition(typeId)
        secondaryTypes = [self._session.getTypeDefinition(id) for id in
                          values.get(PropertyIds.SECONDARY_OBJECT_TYPE_IDS)
                          or ()]
        types = [objectType] + secondaryTypes

        properties = {}
        for id, value in values.items():
            definition = None
            for t in types:
                definition = t.getPropertyDefinition(id)
                if definition is not None:
                    break
            if definition is None:
                raise CmisRuntimeException(
                    "Property %r doesn't exist in type %s" % (id, typeId))
            if value is None:
                value = []
            elif not isinstance(value, (list, tuple)):
                value = [value]
            properties[id] = Property(definition, list(value))

        return {
            '_type': objectType,
            '_secondaryTypes': secondaryTypes,
            '_properties': properties,
            '_allowableActions': objectData.allowableActions,
            '_acl': objectData.acl,
            '_policyIds': objectData.policyIds,
            '_renditions': objectData.renditions,
            '_creationContext': context,
            '_refreshTimestamp': time.time(),
            }

    def convertObject(self, objectData, context):
        """See `nuxeo.cmis.interfaces.IObjectFactory`
        """
        state = self.convertObjectState(objectData, context)
        klass = self.getClass(state['_type'].baseTypeId)
        obj = klass.__new__(klass)
        obj.__setstate__(state)
        return obj
