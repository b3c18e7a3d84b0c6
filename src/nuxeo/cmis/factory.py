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
"""CMIS session factory
"""

import logging

from nuxeo.cmis.schema import TypeManager
from nuxeo.cmis.session import Session


logger = logging.getLogger('nuxeo.cmis.factory')


def resolveClass(dotted_name):
    """Get a class from its dotted name.
    """
    try:
        index = dotted_name.rindex('.')
    except (AttributeError, ValueError):
        raise ValueError("Invalid class name %r" % (dotted_name,))
    mname = dotted_name[:index]
    cname = dotted_name[index+1:]
    module = __import__(mname, globals(), locals(), [cname])
    try:
        return getattr(module, cname)
    except AttributeError:
        raise ValueError("No class %r in module %r" % (cname, mname))


class SessionFactory(object):
    """Factory of sessions to one repository.

    The binding class is called with the factory to build the binding
    of each session. Type definitions are shared by all the sessions.
    """

    klass = Session

    def __init__(self,
                 repository_id,
                 binding_class_name='',
                 binding_class=None,
                 cache_size=1000,
                 url=None,
                 ):
        """Create a factory for sessions to a CMIS repository.
        """
        self.repository_id = repository_id
        self.cache_size = cache_size
        self.url = url # passed to the binding
        if binding_class is None:
            binding_class = resolveClass(binding_class_name)
        self.binding_class = binding_class
        self._type_manager = TypeManager()

    def getTypeManager(self):
        return self._type_manager

    def open(self):
        """Open a new session.
        """
        logger.debug("Opening session to repository %s", self.repository_id)
        return self.klass(self, cache_size=self.cache_size)
