import pytest

from transitplanner.datastreams import StringDataSink, StringDataSource
from transitplanner.xmlio import (
    EntityType,
    XMLEntity,
    XMLParseError,
    XMLReader,
    XMLWriter,
)


def read_all(text, skipdata=False):
    reader = XMLReader(StringDataSource(text))
    entities = []
    while (entity := reader.read_entity(skipdata)) is not None:
        entities.append(entity)
    return entities


def test_reads_start_and_end_elements_with_attributes():
    entities = read_all('<example attr="Hello World"></example>')
    assert [e.type for e in entities] == [EntityType.START_ELEMENT, EntityType.END_ELEMENT]
    assert entities[0].name_data == "example"
    assert entities[0].attribute_value("attr") == "Hello World"
    assert entities[1].name_data == "example"


def test_attribute_order_is_preserved():
    entities = read_all('<n z="1" a="2" m="3"/>')
    assert [key for key, _ in entities[0].attributes] == ["z", "a", "m"]


def test_missing_attribute_gives_empty_string():
    entity = read_all('<n id="7"/>')[0]
    assert entity.attribute_value("lat") == ""
    assert entity.has_attribute("id")
    assert not entity.has_attribute("lat")


def test_set_attribute_replaces_and_appends():
    entity = XMLEntity(EntityType.START_ELEMENT, "n", [("a", "1")])
    entity.set_attribute("a", "2")
    entity.set_attribute("b", "3")
    assert entity.attributes == [("a", "2"), ("b", "3")]


def test_character_data_is_stripped():
    entities = read_all("<a>  hello  </a>")
    assert entities[1].type is EntityType.CHAR_DATA
    assert entities[1].name_data == "hello"


def test_whitespace_only_character_data_is_dropped():
    entities = read_all("<a>\n   <b/>\n</a>")
    assert all(e.type is not EntityType.CHAR_DATA for e in entities)
    assert [e.name_data for e in entities] == ["a", "b", "b", "a"]


def test_skipdata_skips_character_data():
    entities = read_all("<a>text<b>more</b></a>", skipdata=True)
    assert [(e.type, e.name_data) for e in entities] == [
        (EntityType.START_ELEMENT, "a"),
        (EntityType.START_ELEMENT, "b"),
        (EntityType.END_ELEMENT, "b"),
        (EntityType.END_ELEMENT, "a"),
    ]


def test_entity_references_are_decoded():
    entities = read_all('<a k="x &amp; y">1 &lt; 2</a>')
    assert entities[0].attribute_value("k") == "x & y"
    assert entities[1].name_data == "1 < 2"


def test_end_reports_exhaustion():
    reader = XMLReader(StringDataSource("<a><b/></a>"))
    assert not reader.end()
    while reader.read_entity() is not None:
        pass
    assert reader.end()
    assert reader.read_entity() is None


def test_large_document_read_in_chunks():
    body = "".join(f'<node id="{i}" lat="1.5" lon="2.5"/>' for i in range(500))
    entities = read_all(f"<osm>{body}</osm>", skipdata=True)
    starts = [e for e in entities if e.type is EntityType.START_ELEMENT and e.name_data == "node"]
    assert len(starts) == 500
    assert [int(e.attribute_value("id")) for e in starts] == list(range(500))


def test_mismatched_tags_raise():
    with pytest.raises(XMLParseError):
        read_all("<a></b>")


def test_empty_source_raises():
    with pytest.raises(XMLParseError):
        read_all("")


def test_writer_start_end():
    sink = StringDataSink()
    writer = XMLWriter(sink)
    writer.write_entity(XMLEntity(EntityType.START_ELEMENT, "example", [("attr", "Hello World")]))
    writer.write_entity(XMLEntity(EntityType.END_ELEMENT, "example"))
    assert sink.text == '<example attr="Hello World"></example>'


def test_writer_escapes_special_characters():
    sink = StringDataSink()
    writer = XMLWriter(sink)
    writer.write_entity(XMLEntity(EntityType.START_ELEMENT, "a"))
    writer.write_entity(XMLEntity(EntityType.CHAR_DATA, "&<>\"'"))
    writer.write_entity(XMLEntity(EntityType.END_ELEMENT, "a"))
    assert sink.text == "<a>&amp;&lt;&gt;&quot;&apos;</a>"


def test_writer_complete_element_inside_parent():
    sink = StringDataSink()
    writer = XMLWriter(sink)
    writer.write_entity(XMLEntity(EntityType.START_ELEMENT, "a"))
    writer.write_entity(XMLEntity(EntityType.COMPLETE_ELEMENT, "b", [("k", "v")]))
    writer.write_entity(XMLEntity(EntityType.END_ELEMENT, "a"))
    entities = read_all(sink.text)
    assert [(e.type, e.name_data) for e in entities] == [
        (EntityType.START_ELEMENT, "a"),
        (EntityType.START_ELEMENT, "b"),
        (EntityType.END_ELEMENT, "b"),
        (EntityType.END_ELEMENT, "a"),
    ]
    assert entities[1].attribute_value("k") == "v"


def test_writer_unmatched_end_raises():
    writer = XMLWriter(StringDataSink())
    with pytest.raises(ValueError):
        writer.write_entity(XMLEntity(EntityType.END_ELEMENT, "a"))


def test_writer_flush_closes_open_elements():
    sink = StringDataSink()
    writer = XMLWriter(sink)
    writer.write_entity(XMLEntity(EntityType.START_ELEMENT, "a"))
    writer.write_entity(XMLEntity(EntityType.START_ELEMENT, "b"))
    writer.write_entity(XMLEntity(EntityType.CHAR_DATA, "x"))
    writer.flush()
    entities = read_all(sink.text)
    assert [e.name_data for e in entities] == ["a", "b", "x", "b", "a"]


def test_round_trip_preserves_entities():
    original = [
        XMLEntity(EntityType.START_ELEMENT, "osm", [("version", "0.6")]),
        XMLEntity(EntityType.START_ELEMENT, "tag", [("k", "name"), ("v", "A & B <st>")]),
        XMLEntity(EntityType.END_ELEMENT, "tag"),
        XMLEntity(EntityType.START_ELEMENT, "note"),
        XMLEntity(EntityType.CHAR_DATA, "quoted \"text\""),
        XMLEntity(EntityType.END_ELEMENT, "note"),
        XMLEntity(EntityType.END_ELEMENT, "osm"),
    ]
    sink = StringDataSink()
    writer = XMLWriter(sink)
    for entity in original:
        writer.write_entity(entity)
    assert read_all(sink.text) == original