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
"""CMIS type management.
"""

import logging
import threading

from nuxeo.cmis.constants import Cardinality
from nuxeo.cmis.constants import PropertyType
from nuxeo.cmis.constants import Updatability


logger = logging.getLogger('nuxeo.cmis.schema')


class PropertyDefinition(object):
    """Definition of a property in a type.
    """

    def __init__(self, id, propertyType=PropertyType.STRING,
                 cardinality=Cardinality.SINGLE,
                 updatability=Updatability.READWRITE,
                 required=False, queryName=None, displayName=None):
        self.id = id
        self.propertyType = propertyType
        self.cardinality = cardinality
        self.updatability = updatability
        self.required = required
        self.queryName = queryName or id
        self.displayName = displayName or id

    def getId(self):
        return self.id

    def getUpdatability(self):
        return self.updatability

    def getCardinality(self):
        return self.cardinality

    def __repr__(self):
        return '<PropertyDefinition %s (%s, %s)>' % (
            self.id, self.propertyType, self.updatability)


class ObjectType(object):
    """Definition of an object type.

    ``propertyDefinitions`` holds the definitions of the type and of its
    ancestors.
    """

    def __init__(self, id, baseTypeId, propertyDefinitions=(),
                 parentTypeId=None, displayName=None, versionable=False,
                 contentStreamAllowed=None):
        self.id = id
        self.baseTypeId = baseTypeId
        self.parentTypeId = parentTypeId
        self.displayName = displayName or id
        self.versionable = versionable
        self.contentStreamAllowed = contentStreamAllowed
        self._definitions = {}
        for definition in propertyDefinitions:
            self._definitions[definition.id] = definition

    def getId(self):
        return self.id

    def getBaseTypeId(self):
        return self.baseTypeId

    def getPropertyDefinition(self, id, default=None):
        return self._definitions.get(id, default)

    def getPropertyDefinitions(self):
        return dict(self._definitions)

    def __repr__(self):
        return '<ObjectType %s>' % self.id


class TypeManager(object):
    """Cache of the type definitions of a repository.

    Shared by all the sessions of a factory.
    """

    def __init__(self):
        # this lock protects type loading
        self._lock = threading.Lock()
        self._types = {}

    def getTypeDefinition(self, binding, repositoryId, typeId):
        """Get a type definition, loading it through ``binding`` if
        it's not known yet.
        """
        with self._lock:
            objectType = self._types.get(typeId)
            if objectType is None:
                logger.debug("Loading type %s", typeId)
                service = binding.getRepositoryService()
                objectType = service.getTypeDefinition(repositoryId, typeId)
                self._types[typeId] = objectType
        return objectType

    def addTypeDefinition(self, objectType):
        with self._lock:
            self._types[objectType.id] = objectType

    def clear(self):
        with self._lock:
            self._types.clear()
