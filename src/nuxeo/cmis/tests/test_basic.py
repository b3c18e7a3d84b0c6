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
"""Basic tests.
"""
import unittest
from zope.interface.verify import verifyClass


class InterfaceTests(unittest.TestCase):

    def test_Session(self):
        from nuxeo.cmis.interfaces import ISession
        from nuxeo.cmis.session import Session
        verifyClass(ISession, Session)

    def test_Document(self):
        from nuxeo.cmis.interfaces import IDocument
        from nuxeo.cmis.impl import Document
        verifyClass(IDocument, Document)

    def test_ObjectFactory(self):
        from nuxeo.cmis.interfaces import IObjectFactory
        from nuxeo.cmis.objectfactory import ObjectFactory
        verifyClass(IObjectFactory, ObjectFactory)

    def test_OperationContext(self):
        from nuxeo.cmis.interfaces import IOperationContext
        from nuxeo.cmis.data import OperationContext
        verifyClass(IOperationContext, OperationContext)

    def test_ContentStream(self):
        from nuxeo.cmis.interfaces import IContentStream
        from nuxeo.cmis.data import ContentStream
        verifyClass(IContentStream, ContentStream)

    def test_FakeBinding(self):
        from nuxeo.cmis.interfaces import IRepositoryBinding
        from nuxeo.cmis.tests.fakebinding import FakeBinding
        verifyClass(IRepositoryBinding, FakeBinding)

    def test_FakeServices(self):
        from nuxeo.cmis.interfaces import IRepositoryService
        from nuxeo.cmis.interfaces import IObjectService
        from nuxeo.cmis.interfaces import IVersioningService
        from nuxeo.cmis.tests.fakebinding import FakeServices
        verifyClass(IRepositoryService, FakeServices)
        verifyClass(IObjectService, FakeServices)
        verifyClass(IVersioningService, FakeServices)


if __name__ == '__main__':
    unittest.main()
