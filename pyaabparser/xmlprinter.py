# This file is part of Androguard.
#
# Copyright (C) 2012, Anthony Desnos <desnos at t0t0.fr>
# All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS-IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import re
import binascii
import logging

from pyaabparser.utils import format_item
from lxml import etree

log = logging.getLogger("pyaabparser.xmlprinter")


class XMLPrinter:
    """
    Converter for protobuf compiled XML (aapt2 XmlNode) into a lxml
    ElementTree, which can easily be converted into XML.

    This is the format used for the manifest and the XML resources
    inside an Android App Bundle.
    """
    __charrange = None
    __replacement = None

    def __init__(self, xml_node):
        self.root = None
        self.packerwarning = False

        if xml_node is None or xml_node.WhichOneof("node") != "element":
            log.warning("Compiled XML does not start with an element!")
            return

        self.root = self._append(None, xml_node.element)

    def _append(self, parent, element):
        tag = "{}{}".format(self._print_namespace(element.namespace_uri), self._fix_name(element.name))
        nsmap = {}
        for ns in element.namespace_declaration:
            # spaces in the URI are not accepted by etree
            nsmap[ns.prefix or None] = ns.uri.strip()

        log.debug("START_TAG: {} (line={})".format(tag, element_line(element)))
        if parent is None:
            elem = etree.Element(tag, nsmap=nsmap)
        else:
            elem = etree.SubElement(parent, tag, nsmap=nsmap)

        for attr in element.attribute:
            name = "{}{}".format(self._print_namespace(attr.namespace_uri), self._fix_name(attr.name))
            value = self._fix_value(self._get_attribute_value(attr))

            log.debug("found an attribute: {}='{}'".format(name, value.encode("utf-8")))
            if name in elem.attrib:
                log.warning("Duplicate attribute '{}'! Will overwrite!".format(name))
            elem.set(name, value)

        last = None
        for child in element.child:
            kind = child.WhichOneof("node")
            if kind == "element":
                last = self._append(elem, child.element)
            elif kind == "text":
                text = self._fix_value(child.text)
                if last is None:
                    elem.text = (elem.text or "") + text
                else:
                    last.tail = (last.tail or "") + text
        return elem

    def get_buff(self):
        """
        Returns the raw XML file without prettification applied.

        :returns: bytes, encoded as UTF-8
        """
        return self.get_xml(pretty=False)

    def get_xml(self, pretty=True):
        """
        Get the XML as an UTF-8 string

        :returns: bytes encoded as UTF-8
        """
        return etree.tostring(self.root, encoding="utf-8", pretty_print=pretty)

    def get_xml_obj(self):
        """
        Get the XML as an ElementTree object

        :returns: :class:`lxml.etree.Element`
        """
        return self.root

    def is_valid(self):
        """
        Return True if a root element could be built.
        """
        return self.root is not None

    def is_packed(self):
        """
        Returns True if names or values had to be fixed to build the tree

        :returns: True if packer detected, False otherwise
        """
        return self.packerwarning

    def _get_attribute_value(self, attr):
        """
        Return the literal value of an attribute, or the printable
        form of its compiled value if it has no literal value.
        """
        if attr.value:
            return attr.value
        if attr.HasField("compiled_item"):
            return format_item(attr.compiled_item)
        return ""

    def _fix_name(self, name):
        """
        Apply some fixes to element named and attribute names.
        Try to get conform to:
        > Like element names, attribute names are case-sensitive and must start with a letter or underscore.
        > The rest of the name can contain letters, digits, hyphens, underscores, and periods.
        See: https://msdn.microsoft.com/en-us/library/ms256152(v=vs.110).aspx

        :param name: Name of the attribute
        :return: a fixed version of the name
        """
        if not name:
            log.warning("Empty name found")
            self.packerwarning = True
            return "_"
        if not name[0].isalpha() and name[0] != "_":
            log.warning("Invalid start for name '{}'".format(name))
            self.packerwarning = True
            name = "_{}".format(name)
        if name.startswith("android:"):
            log.warning(
                "Name '{}' starts with 'android:' prefix! "
                "The Manifest seems to be broken? Removing prefix.".format(
                    name
                )
            )
            self.packerwarning = True
            name = name[len("android:"):]
        if ":" in name:
            log.warning("Name seems to contain a namespace prefix: '{}'".format(name))
        if not re.match(r"^[a-zA-Z0-9._-]*$", name):
            log.warning("Name '{}' contains invalid characters!".format(name))
            self.packerwarning = True
            name = re.sub(r"[^a-zA-Z0-9._-]", "_", name)

        return name

    def _fix_value(self, value):
        """
        Return a cleaned version of a value
        according to the specification:
        > Char	   ::=   	#x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]

        See https://www.w3.org/TR/xml/#charsets

        :param value: a value to clean
        :return: the cleaned value
        """
        if not self.__charrange or not self.__replacement:
            self.__charrange = re.compile(u'^[\u0020-\uD7FF\u0009\u000A\u000D\uE000-\uFFFD\U00010000-\U0010FFFF]*$')
            self.__replacement = re.compile(u'[^\u0020-\uD7FF\u0009\u000A\u000D\uE000-\uFFFD\U00010000-\U0010FFFF]')

        # Reading string until \x00. This is the same as aapt does.
        if "\x00" in value:
            self.packerwarning = True
            log.warning(
                "Null byte found in attribute value at position {}: "
                "Value(hex): '{}'".format(
                    value.find("\x00"),
                    binascii.hexlify(value.encode("utf-8"))
                )
            )
            value = value[:value.find("\x00")]

        if not self.__charrange.match(value):
            log.warning("Invalid character in value found. Replacing with '_'.")
            self.packerwarning = True
            value = self.__replacement.sub('_', value)
        return value

    def _print_namespace(self, uri):
        if uri != "":
            uri = "{{{}}}".format(uri.strip())
        return uri


def element_line(element):
    """
    Line number of the first attribute of an element, as compiled XML only
    keeps source positions on nodes and attributes.
    """
    for attr in element.attribute:
        if attr.HasField("source"):
            return attr.source.line_number
    return 0
