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
"""CMIS data objects.

Simple values exchanged between the proxies, the session and the
binding.
"""

import re
import zope.interface

from nuxeo.cmis.interfaces import IContentStream
from nuxeo.cmis.interfaces import IOperationContext
from nuxeo.cmis.interfaces import CmisInvalidArgumentException
from nuxeo.cmis.constants import CmisVersion
from nuxeo.cmis.constants import Cardinality
from nuxeo.cmis.constants import IncludeRelationships
from nuxeo.cmis.constants import PropertyIds
from nuxeo.cmis.constants import MINIMUM_CMIS_VERSION
from nuxeo.cmis.constants import REQUIRED_PROPERTIES
from nuxeo.cmis.constants import RENDITION_NONE
from nuxeo.cmis.constants import DEFAULT_MIME_TYPE


class ObjectId(object):
    """Immutable object id.
    """

    __slots__ = ('_id',)

    def __init__(self, id):
        if not isinstance(id, str) or not id:
            raise CmisInvalidArgumentException("Invalid object id %r" % (id,))
        object.__setattr__(self, '_id', id)

    def __setattr__(self, name, value):
        raise AttributeError("ObjectId is immutable")

    def getId(self):
        return self._id

    def __eq__(self, other):
        if not isinstance(other, ObjectId):
            return NotImplemented
        return self._id == other._id

    def __ne__(self, other):
        if not isinstance(other, ObjectId):
            return NotImplemented
        return self._id != other._id

    def __hash__(self):
        return hash(self._id)

    def __str__(self):
        return self._id

    def __repr__(self):
        return '<ObjectId %r>' % self._id


@zope.interface.implementer(IContentStream)
class ContentStream(object):
    """Content stream.

    Wraps a file-like object, which is read lazily and never closed by
    the client.
    """

    def __init__(self, fileName, length, mimeType, stream):
        self._fileName = fileName
        self._length = length
        self._mimeType = mimeType or DEFAULT_MIME_TYPE
        self._stream = stream

    def getFileName(self):
        """See `nuxeo.cmis.interfaces.IContentStream`
        """
        return self._fileName

    def getLength(self):
        """See `nuxeo.cmis.interfaces.IContentStream`
        """
        return self._length

    def getMimeType(self):
        """See `nuxeo.cmis.interfaces.IContentStream`
        """
        return self._mimeType

    def getStream(self):
        """See `nuxeo.cmis.interfaces.IContentStream`
        """
        return self._stream

    def read(self, size=-1):
        return self._stream.read(size)

    def __repr__(self):
        return '<ContentStream %r %s>' % (self._fileName, self._mimeType)


HASH_RE = re.compile(r'^\{([^}]+)\}(.*)$')

class ContentStreamHash(object):
    """A value of the cmis:contentStreamHash property.

    The value has the form ``{algorithm}hash``.
    """

    def __init__(self, propertyValue):
        self._propertyValue = propertyValue
        self._algorithm = None
        self._hash = None
        m = HASH_RE.match(propertyValue or '')
        if m is not None:
            self._algorithm = m.group(1).strip().lower()
            self._hash = m.group(2).replace(' ', '').lower()

    def getPropertyValue(self):
        return self._propertyValue

    def getAlgorithm(self):
        return self._algorithm

    def getHash(self):
        return self._hash


@zope.interface.implementer(IOperationContext)
class OperationContext(object):
    """Operation context.

    Controls what a fetch includes. Changing a context only affects the
    fetches done afterwards.
    """

    def __init__(self, filter=None, includeAcls=False,
                 includeAllowableActions=True, includePathSegments=True,
                 includePolicies=False,
                 includeRelationships=IncludeRelationships.NONE,
                 renditionFilter=RENDITION_NONE, cacheEnabled=True):
        self.setFilter(filter)
        self._includeAcls = includeAcls
        self._includeAllowableActions = includeAllowableActions
        self._includePathSegments = includePathSegments
        self._includePolicies = includePolicies
        self.setIncludeRelationships(includeRelationships)
        self.setRenditionFilterString(renditionFilter)
        self._cacheEnabled = cacheEnabled

    def setFilter(self, filter):
        """Set the property filter from a sequence of query names.

        None means all properties.
        """
        if filter is None:
            self._filter = None
            return
        names = set()
        for name in filter:
            name = name.strip()
            if not name:
                continue
            if name == '*':
                self._filter = set(['*'])
                return
            if ',' in name:
                raise CmisInvalidArgumentException(
                    "Filter property %r must not contain a comma" % name)
            names.add(name)
        self._filter = names or None

    def setFilterString(self, filter):
        if not filter or not filter.strip():
            self.setFilter(None)
        else:
            self.setFilter(filter.split(','))

    def getFilter(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        if self._filter is None:
            return None
        return set(self._filter)

    def getFilterString(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        if self._filter is None:
            return None
        return ','.join(sorted(self._filter))

    def getQueryFilterString(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        if self._filter is None:
            return None
        if '*' in self._filter:
            return '*'
        names = set(self._filter)
        names.update(REQUIRED_PROPERTIES)
        return ','.join(sorted(names))

    def setIncludeAcls(self, include):
        self._includeAcls = include

    def isIncludeAcls(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._includeAcls

    def setIncludeAllowableActions(self, include):
        self._includeAllowableActions = include

    def isIncludeAllowableActions(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._includeAllowableActions

    def setIncludePathSegments(self, include):
        self._includePathSegments = include

    def isIncludePathSegments(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._includePathSegments

    def setIncludePolicies(self, include):
        self._includePolicies = include

    def isIncludePolicies(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._includePolicies

    def setIncludeRelationships(self, include):
        if include not in IncludeRelationships.ALL:
            raise CmisInvalidArgumentException(
                "Invalid relationships inclusion %r" % (include,))
        self._includeRelationships = include

    def getIncludeRelationships(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._includeRelationships

    def setRenditionFilterString(self, filter):
        if not filter or not filter.strip():
            filter = RENDITION_NONE
        self._renditionFilter = filter.strip()

    def getRenditionFilterString(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._renditionFilter

    def setCacheEnabled(self, enabled):
        self._cacheEnabled = enabled

    def isCacheEnabled(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        return self._cacheEnabled

    def getCacheKey(self):
        """See `nuxeo.cmis.interfaces.IOperationContext`
        """
        flags = ''.join(flag and '1' or '0' for flag in (
            self._includeAcls,
            self._includeAllowableActions,
            self._includePolicies,
            self._includePathSegments,
            ))
        return '%s|%s|%s|%s' % (flags, self._includeRelationships,
                                self.getFilterString() or '',
                                self._renditionFilter)

    def __repr__(self):
        return '<OperationContext %s>' % self.getCacheKey()


class ObjectData(object):
    """An object as sent by the repository.

    ``properties`` maps property ids to values, lists for multi-valued
    properties.
    """

    def __init__(self, properties, allowableActions=None, acl=None,
                 policyIds=None, renditions=None):
        self.properties = properties
        self.allowableActions = allowableActions
        self.acl = acl
        self.policyIds = policyIds
        self.renditions = renditions

    def getId(self):
        return self.properties.get(PropertyIds.OBJECT_ID)

    def getBaseTypeId(self):
        return self.properties.get(PropertyIds.BASE_TYPE_ID)

    def __repr__(self):
        return '<ObjectData %r>' % self.getId()


class RepositoryInfo(object):
    """Description of a repository.

    ``capabilities`` maps operation names to a boolean, operations not
    mentioned being supported.
    """

    def __init__(self, id, name='', cmisVersion=CmisVersion.CMIS_1_1,
                 capabilities=None):
        if cmisVersion not in CmisVersion.ORDER:
            raise CmisInvalidArgumentException(
                "Unknown CMIS version %r" % (cmisVersion,))
        self.id = id
        self.name = name
        self.cmisVersion = cmisVersion
        self.capabilities = dict(capabilities or {})

    def getId(self):
        return self.id

    def getCmisVersion(self):
        return self.cmisVersion

    def supports(self, operation):
        """Tell if an operation is available in this repository.
        """
        minimum = MINIMUM_CMIS_VERSION.get(operation)
        if minimum is not None:
            order = CmisVersion.ORDER
            if order.index(self.cmisVersion) < order.index(minimum):
                return False
        return bool(self.capabilities.get(operation, True))


class Ace(object):
    """Access control entry.
    """

    def __init__(self, principalId, permissions, direct=True):
        self.principalId = principalId
        self.permissions = list(permissions)
        self.direct = direct

    def __eq__(self, other):
        if not isinstance(other, Ace):
            return NotImplemented
        return (self.principalId == other.principalId and
                self.permissions == other.permissions)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return '<Ace %s %s>' % (self.principalId, ','.join(self.permissions))


class Rendition(object):

    def __init__(self, streamId, mimeType, length=None, kind=None,
                 title=None):
        self.streamId = streamId
        self.mimeType = mimeType
        self.length = length
        self.kind = kind
        self.title = title

    def __repr__(self):
        return '<Rendition %s %s>' % (self.streamId, self.mimeType)


class Property(object):
    """A property of a proxy, with its definition.
    """

    def __init__(self, definition, values):
        self._definition = definition
        self._values = values

    def getId(self):
        return self._definition.id

    def getQueryName(self):
        return self._definition.queryName

    def getDefinition(self):
        return self._definition

    def isMultiValued(self):
        return self._definition.cardinality == Cardinality.MULTI

    def getValues(self):
        return list(self._values)

    def getValue(self):
        """Return the value, or the list of values if multi-valued.
        """
        if self.isMultiValued():
            return list(self._values)
        if not self._values:
            return None
        return self._values[0]

    def getFirstValue(self):
        if not self._values:
            return None
        return self._values[0]

    def __repr__(self):
        return '<Property %s=%r>' % (self.getId(), self.getValue())
