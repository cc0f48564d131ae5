import unittest
from xml.dom import minidom

from davxml.parsing.namespace_utils import (
    child_elements,
    convert_dav_namespace,
    count_dav_declarations,
    find_child,
    get_text_content,
    parse_properties,
    to_clark_notation,
)


class TestConvertDavNamespace(unittest.TestCase):
    def test_rewrites_default_and_prefixed_declarations(self):
        self.assertEqual(convert_dav_namespace('<a xmlns="DAV:"/>'), '<a xmlns="urn:DAV"/>')
        self.assertEqual(
            convert_dav_namespace('<d:a xmlns:d="DAV:"/>'),
            '<d:a xmlns:d="urn:DAV"/>',
        )

    def test_keeps_quote_style(self):
        self.assertEqual(
            convert_dav_namespace("<D:a xmlns:D='DAV:'/>"),
            "<D:a xmlns:D='urn:DAV'/>",
        )
        self.assertEqual(convert_dav_namespace("<a xmlns='DAV:'/>"), "<a xmlns='urn:DAV'/>")

    def test_rewrites_every_declaration(self):
        source = (
            '<x:propfind xmlns:x="DAV:">'
            "<x:prop><y:displayname xmlns:y='DAV:'/><resourcetype xmlns=\"DAV:\"/></x:prop>"
            "</x:propfind>"
        )
        expected = (
            '<x:propfind xmlns:x="urn:DAV">'
            "<x:prop><y:displayname xmlns:y='urn:DAV'/><resourcetype xmlns=\"urn:DAV\"/></x:prop>"
            "</x:propfind>"
        )
        self.assertEqual(convert_dav_namespace(source), expected)
        self.assertEqual(count_dav_declarations(source), 3)

    def test_leaves_superstring_values_alone(self):
        source = '<x:a xmlns:x="DAV:extended" xmlns:y="http://example.org/DAV:"/>'
        self.assertEqual(convert_dav_namespace(source), source)

    def test_requires_matching_quotes(self):
        source = "<a xmlns:x=\"DAV:'/>"
        self.assertEqual(convert_dav_namespace(source), source)

    def test_ignores_other_attributes_and_text(self):
        source = '<a foo="DAV:" xxmlns:d="DAV:">xmlns:d=DAV: stays</a>'
        self.assertEqual(convert_dav_namespace(source), source)

    def test_passes_malformed_input_through(self):
        self.assertEqual(convert_dav_namespace('<a xmlns:d="DAV:"><b>'), '<a xmlns:d="urn:DAV"><b>')
        self.assertEqual(convert_dav_namespace("not xml at all"), "not xml at all")


class TestToClarkNotation(unittest.TestCase):
    def setUp(self):
        self.document = minidom.parseString(
            '<root xmlns:d="urn:DAV" xmlns:e="http://example.org/ns">'
            "<d:prop/><e:custom/><bare/>text<!-- note --><?pi data?>"
            "</root>"
        )
        self.root = self.document.documentElement

    def test_maps_substitute_namespace_back_to_dav(self):
        prop = self.root.childNodes[0]
        self.assertEqual(to_clark_notation(prop), "{DAV:}prop")

    def test_keeps_other_namespaces(self):
        custom = self.root.childNodes[1]
        self.assertEqual(to_clark_notation(custom), "{http://example.org/ns}custom")

    def test_namespace_less_element_keeps_empty_braces(self):
        self.assertEqual(to_clark_notation(self.root), "{}root")
        self.assertEqual(to_clark_notation(self.root.childNodes[2]), "{}bare")

    def test_non_element_nodes_have_no_clark_name(self):
        text, comment, pi = self.root.childNodes[3:6]
        self.assertIsNone(to_clark_notation(text))
        self.assertIsNone(to_clark_notation(comment))
        self.assertIsNone(to_clark_notation(pi))
        self.assertIsNone(to_clark_notation(self.document))

    def test_is_idempotent(self):
        prop = self.root.childNodes[0]
        self.assertEqual(to_clark_notation(prop), to_clark_notation(prop))


class TestTreeWalks(unittest.TestCase):
    def setUp(self):
        self.root = minidom.parseString(
            '<d:propertyupdate xmlns:d="urn:DAV" xmlns:z="http://ns.example.com/z">'
            "<d:set><d:prop>"
            "<z:author>Jane <b>Doe</b></z:author>"
            "<d:displayname><![CDATA[Report]]></d:displayname>"
            "<z:empty/>"
            "</d:prop></d:set>"
            "<!-- trailing -->"
            "</d:propertyupdate>"
        ).documentElement

    def test_child_elements_skips_non_elements(self):
        names = [to_clark_notation(c) for c in child_elements(self.root)]
        self.assertEqual(names, ["{DAV:}set"])

    def test_find_child_matches_on_clark_name(self):
        set_elem = find_child(self.root, "{DAV:}set")
        self.assertIsNotNone(set_elem)
        self.assertIsNotNone(find_child(set_elem, "{DAV:}prop"))
        self.assertIsNone(find_child(self.root, "{urn:DAV}set"))
        self.assertIsNone(find_child(self.root, "{DAV:}remove"))

    def test_get_text_content_joins_descendant_text(self):
        prop = find_child(find_child(self.root, "{DAV:}set"), "{DAV:}prop")
        author = find_child(prop, "{http://ns.example.com/z}author")
        self.assertEqual(get_text_content(author), "Jane Doe")

    def test_parse_properties_from_parent(self):
        properties = parse_properties(find_child(self.root, "{DAV:}set"))
        self.assertEqual(
            properties,
            {
                "{http://ns.example.com/z}author": "Jane Doe",
                "{DAV:}displayname": "Report",
                "{http://ns.example.com/z}empty": "",
            },
        )
        self.assertEqual(
            list(properties),
            ["{http://ns.example.com/z}author", "{DAV:}displayname", "{http://ns.example.com/z}empty"],
        )

    def test_parse_properties_accepts_prop_element_and_property_map(self):
        prop = find_child(find_child(self.root, "{DAV:}set"), "{DAV:}prop")
        properties = parse_properties(
            prop,
            {"{http://ns.example.com/z}author": lambda elem: elem.localName.upper()},
        )
        self.assertEqual(properties["{http://ns.example.com/z}author"], "AUTHOR")
        self.assertEqual(properties["{DAV:}displayname"], "Report")

    def test_parse_properties_without_prop_children(self):
        self.assertEqual(parse_properties(self.root), {})


if __name__ == "__main__":
    unittest.main()
