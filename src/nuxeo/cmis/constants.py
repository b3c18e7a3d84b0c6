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
"""CMIS constants.

Enumerations are plain classes holding string values, the strings being
the ones used on the wire.
"""

RENDITION_NONE = 'cmis:none'

DEFAULT_MIME_TYPE = 'application/octet-stream'


class PropertyIds(object):
    NAME = 'cmis:name'
    DESCRIPTION = 'cmis:description'
    OBJECT_ID = 'cmis:objectId'
    OBJECT_TYPE_ID = 'cmis:objectTypeId'
    BASE_TYPE_ID = 'cmis:baseTypeId'
    SECONDARY_OBJECT_TYPE_IDS = 'cmis:secondaryObjectTypeIds'
    CREATED_BY = 'cmis:createdBy'
    CREATION_DATE = 'cmis:creationDate'
    LAST_MODIFIED_BY = 'cmis:lastModifiedBy'
    LAST_MODIFICATION_DATE = 'cmis:lastModificationDate'
    CHANGE_TOKEN = 'cmis:changeToken'
    IS_IMMUTABLE = 'cmis:isImmutable'
    IS_LATEST_VERSION = 'cmis:isLatestVersion'
    IS_MAJOR_VERSION = 'cmis:isMajorVersion'
    IS_LATEST_MAJOR_VERSION = 'cmis:isLatestMajorVersion'
    IS_PRIVATE_WORKING_COPY = 'cmis:isPrivateWorkingCopy'
    VERSION_LABEL = 'cmis:versionLabel'
    VERSION_SERIES_ID = 'cmis:versionSeriesId'
    IS_VERSION_SERIES_CHECKED_OUT = 'cmis:isVersionSeriesCheckedOut'
    VERSION_SERIES_CHECKED_OUT_BY = 'cmis:versionSeriesCheckedOutBy'
    VERSION_SERIES_CHECKED_OUT_ID = 'cmis:versionSeriesCheckedOutId'
    CHECKIN_COMMENT = 'cmis:checkinComment'
    CONTENT_STREAM_LENGTH = 'cmis:contentStreamLength'
    CONTENT_STREAM_MIME_TYPE = 'cmis:contentStreamMimeType'
    CONTENT_STREAM_FILE_NAME = 'cmis:contentStreamFileName'
    CONTENT_STREAM_ID = 'cmis:contentStreamId'
    CONTENT_STREAM_HASH = 'cmis:contentStreamHash'
    PARENT_ID = 'cmis:parentId'
    PATH = 'cmis:path'
    POLICY_TEXT = 'cmis:policyText'

# Needed to build a proxy, always fetched
REQUIRED_PROPERTIES = (
    PropertyIds.OBJECT_ID,
    PropertyIds.BASE_TYPE_ID,
    PropertyIds.OBJECT_TYPE_ID,
    )


class CmisVersion(object):
    CMIS_1_0 = '1.0'
    CMIS_1_1 = '1.1'

    # oldest first
    ORDER = (CMIS_1_0, CMIS_1_1)


class BaseTypeId(object):
    CMIS_DOCUMENT = 'cmis:document'
    CMIS_FOLDER = 'cmis:folder'
    CMIS_RELATIONSHIP = 'cmis:relationship'
    CMIS_POLICY = 'cmis:policy'
    CMIS_ITEM = 'cmis:item'
    CMIS_SECONDARY = 'cmis:secondary'


class Updatability(object):
    READONLY = 'readonly'
    READWRITE = 'readwrite'
    ONCREATE = 'oncreate'
    WHENCHECKEDOUT = 'whencheckedout'

# Properties that can be sent when creating an object
CREATE_UPDATABILITY = frozenset([Updatability.READWRITE,
                                 Updatability.ONCREATE])

# Properties that can be sent when checking in a private working copy
CHECKIN_UPDATABILITY = frozenset([Updatability.READWRITE,
                                  Updatability.WHENCHECKEDOUT])


class Cardinality(object):
    SINGLE = 'single'
    MULTI = 'multi'


class PropertyType(object):
    BOOLEAN = 'boolean'
    ID = 'id'
    INTEGER = 'integer'
    DATETIME = 'datetime'
    DECIMAL = 'decimal'
    HTML = 'html'
    STRING = 'string'
    URI = 'uri'


class IncludeRelationships(object):
    NONE = 'none'
    SOURCE = 'source'
    TARGET = 'target'
    BOTH = 'both'

    ALL = (NONE, SOURCE, TARGET, BOTH)


class VersioningState(object):
    NONE = 'none'
    CHECKEDOUT = 'checkedout'
    MAJOR = 'major'
    MINOR = 'minor'


class Operations(object):
    """Names of the operations whose availability can be queried.
    """
    APPEND_CONTENT_STREAM = 'appendContentStream'
    CREATE_DOCUMENT_FROM_SOURCE = 'createDocumentFromSource'

# Protocol version introducing an operation
MINIMUM_CMIS_VERSION = {
    Operations.APPEND_CONTENT_STREAM: CmisVersion.CMIS_1_1,
    }
