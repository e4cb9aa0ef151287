from textwrap import dedent

import pytest

from armshift.lang.typescript import NodeKind, parse
from armshift.refactor.transforms import (
    DEFAULT_POLICY,
    NestingClassifier,
    PropertyKind,
    PropertyNestingTransformer,
    read_object_literal,
    transform_object_literals,
)


def migrate(source: str, policy=DEFAULT_POLICY) -> str:
    tree = parse(source)
    transform_object_literals(tree, policy)
    return tree.serialize()


def first_literal(source: str):
    tree = parse(source)
    ref = tree.find_descendants(NodeKind.OBJECT)[0]
    return read_object_literal(tree, tree.node(ref))


def test_inline_literal_is_nested_inline():
    source = (
        'const params = { location: "eastus", managementCluster: { clusterSize: 3 }, '
        'networkBlock: "192.168.48.0/22" };'
    )

    assert migrate(source) == (
        'const params = { location: "eastus", properties: { managementCluster: '
        '{ clusterSize: 3 }, networkBlock: "192.168.48.0/22" } };'
    )


def test_multiline_literal_keeps_layout_and_trailing_commas():
    source = dedent("""
        const params = {
          location: "eastus",
          sku: { name: "Standard" },
          managementCluster: { clusterSize: 3 },
          networkBlock: "192.168.48.0/22",
        };
    """).strip()

    assert migrate(source) == dedent("""
        const params = {
          location: "eastus",
          sku: { name: "Standard" },
          properties: {
            managementCluster: { clusterSize: 3 },
            networkBlock: "192.168.48.0/22",
          },
        };
    """).strip()


def test_multiline_values_are_reindented():
    source = dedent("""
        const privateCloudParams = {
          location: LOCATION,
          sku: {
            name: "AV36",
          },
          managementCluster: {
            clusterSize: 3,
          },
          networkBlock: "192.168.48.0/22",
          internet: "Disabled",
          identitySources: [],
        };
    """).strip()

    assert migrate(source) == dedent("""
        const privateCloudParams = {
          location: LOCATION,
          sku: {
            name: "AV36",
          },
          properties: {
            managementCluster: {
              clusterSize: 3,
            },
            networkBlock: "192.168.48.0/22",
            internet: "Disabled",
            identitySources: [],
          },
        };
    """).strip()


def test_all_envelope_keys_stay_at_top_level():
    source = dedent("""
        const resource = {
          id: "/subscriptions/123",
          name: "myResource",
          type: "Microsoft.Test/resources",
          location: "eastus",
          sku: { name: "Standard" },
          tags: { env: "prod" },
          identity: { type: "SystemAssigned" },
          kind: "StorageV2",
          etag: "abc123",
          zones: ["1", "2"],
          customProp: "value"
        };
    """).strip()

    text = migrate(source)

    assert text.endswith(
        '  zones: ["1", "2"],\n  properties: {\n    customProp: "value"\n  }\n};'
    )
    assert text.count("properties: {") == 1


@pytest.mark.parametrize(
    "source",
    [
        'const config = {\n  prop1: "value1",\n  prop2: "value2"\n};',
        'const resource = {\n  location: "eastus",\n  properties: {\n    existing: "value"\n  }\n};',
        'const resource = {\n  location: "eastus",\n  sku: { name: "Standard" },\n  tags: { env: "prod" }\n};',
        "const empty = {};",
        'const r = { location: "eastus", properties: {}, extra: 1 };',
        "const r = { ...base, location };",
    ],
    ids=[
        "no-envelope-keys",
        "already-nested",
        "envelope-only",
        "empty",
        "wrapper-with-extra-keys",
        "spread-and-envelope",
    ],
)
def test_literals_that_do_not_qualify_are_untouched(source):
    assert migrate(source) == source


def test_spreads_move_to_the_end():
    source = 'const p = { ...base, location: "eastus", foo: 1 };'

    assert migrate(source) == (
        'const p = { location: "eastus", properties: { foo: 1 }, ...base };'
    )


def test_shorthand_and_string_keys_are_classified_by_name():
    source = 'const p = { location, "foo-bar": 1, "sku": s, size };'

    assert migrate(source) == (
        'const p = { location, "sku": s, properties: { "foo-bar": 1, size } };'
    )


def test_computed_keys_are_nested():
    source = 'const p = { location: "x", [key]: 1, foo: 2 };'

    assert migrate(source) == (
        'const p = { location: "x", properties: { [key]: 1, foo: 2 } };'
    )


def test_comments_travel_with_their_properties():
    source = dedent("""
        const params = {
          // where it lives
          location: "eastus",
          networkBlock: "10.0.0.0/22", // CIDR
        };
    """).strip()

    assert migrate(source) == dedent("""
        const params = {
          // where it lives
          location: "eastus",
          properties: {
            networkBlock: "10.0.0.0/22", // CIDR
          },
        };
    """).strip()


def test_template_string_lines_are_not_reindented():
    source = (
        "const p = {\n"
        '  location: "eastus",\n'
        "  script: `line one\n"
        "line two`,\n"
        "};"
    )

    assert migrate(source) == (
        "const p = {\n"
        '  location: "eastus",\n'
        "  properties: {\n"
        "    script: `line one\n"
        "line two`,\n"
        "  },\n"
        "};"
    )


def test_nested_resources_are_rewritten_innermost_first():
    source = dedent("""
        const outer = {
          location: "eastus",
          nestedResource: {
            location: "westus",
            customProp: "value"
          }
        };
    """).strip()

    assert migrate(source) == dedent("""
        const outer = {
          location: "eastus",
          properties: {
            nestedResource: {
              location: "westus",
              properties: {
                customProp: "value"
              }
            }
          }
        };
    """).strip()


def test_multiple_literals_are_rewritten_independently():
    source = dedent("""
        const resource1 = {
          location: "eastus",
          prop1: "value1"
        };

        const resource2 = {
          location: "westus",
          prop2: "value2"
        };
    """).strip()

    text = migrate(source)

    assert text.count("properties: {") == 2


def test_literals_in_call_arguments_are_rewritten():
    source = "await client.vms.beginCreate(rg, { location: loc, hardwareProfile: hw });"

    assert migrate(source) == (
        "await client.vms.beginCreate(rg, { location: loc, "
        "properties: { hardwareProfile: hw } });"
    )


def test_extra_top_level_keys_stay_on_the_envelope():
    policy = DEFAULT_POLICY.with_extra_keys(["plan"])
    source = 'const p = { location: "x", plan: p, size: 1 };'

    assert migrate(source, policy) == (
        'const p = { location: "x", plan: p, properties: { size: 1 } };'
    )


def test_second_run_is_a_no_op():
    source = dedent("""
        const a = { location: "x", foo: { location: "y", bar: 1 } };
        const b = {
          sku: s,
          size: 2,
        };
    """).strip()
    once = migrate(source)

    assert once != source
    assert migrate(once) == once


def test_transformer_records_moved_keys():
    tree = parse('const p = { location: "x", a: 1, b: 2 };')
    transformer = PropertyNestingTransformer()

    transformer.transform(tree)

    assert transformer.applied_count == 1
    record = transformer.records[0]
    assert record.transform == "nest-properties"
    assert record.line == 1
    assert "2 key(s)" in record.detail


def test_read_object_literal_collects_members():
    literal = first_literal(
        'const p = { location: "x", size, ...rest, run() { return 1; }, "a-b": 2, };'
    )

    kinds = [p.kind for p in literal.properties]
    names = [p.name for p in literal.properties]

    assert kinds == [
        PropertyKind.ASSIGNMENT,
        PropertyKind.SHORTHAND,
        PropertyKind.SPREAD,
        PropertyKind.METHOD,
        PropertyKind.ASSIGNMENT,
    ]
    assert names == ["location", "size", None, "run", "a-b"]
    assert literal.trailing_comma
    assert not literal.multiline


def test_classifier_requires_both_key_groups():
    classifier = NestingClassifier()

    assert classifier.should_transform(first_literal("const p = { location: 1, a: 2 };"))
    assert not classifier.should_transform(first_literal("const p = { a: 1, b: 2 };"))
    assert not classifier.should_transform(first_literal("const p = { location: 1 };"))
    assert not classifier.should_transform(
        first_literal("const p = { location: 1, properties: 2, a: 3 };")
    )


def test_partition_keeps_source_order_within_groups():
    classifier = NestingClassifier()
    literal = first_literal("const p = { b: 1, location: 2, ...s, a: 3, tags: 4 };")

    buckets = classifier.partition(literal)

    assert [p.name for p in buckets.top_level] == ["location", "tags"]
    assert [p.name for p in buckets.nested] == ["b", "a"]
    assert [p.text for p in buckets.spreads] == ["...s"]
