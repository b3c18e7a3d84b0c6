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
"""ZConfig datatypes.

The ``cmis-session`` section type is declared in the ``component.xml``
of this package, usable with ``<import package="nuxeo.cmis"/>``.
"""

from nuxeo.cmis.factory import SessionFactory


class CMISSessionFactory(object):
    """CMIS session factory, built from a ``cmis-session`` section.
    """

    def __init__(self, config):
        self.config = config
        self.name = config.getSectionName()
        self._factory = None

    def getSessionFactory(self):
        if self._factory is None:
            self._factory = self.createSessionFactory()
        return self._factory

    def open(self):
        return self.getSessionFactory().open()

    def createSessionFactory(self):
        config = self.config
        return SessionFactory(
            repository_id=config.repository_id,
            binding_class_name=config.binding_class,
            cache_size=config.cache_size,
            url=config.url,
            )
