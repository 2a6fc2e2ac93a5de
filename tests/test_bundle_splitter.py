"""Tests for bundle splitter."""

import json

import pytest

from fhir_bundler.bundle import (
    assemble_message_bundle,
    assemble_transaction_bundle,
    parse_bundle,
    split_bundle,
    write_resource_files,
)
from fhir_bundler.bundle.splitter import ResourceFile
from fhir_bundler.errors import MissingIdentifierError, NotABundleError
from fhir_bundler.resources import serialize_resource


def test_split_round_trips_transaction_bundle():
    patient = {"resourceType": "Patient", "id": "abc"}

    files = split_bundle(assemble_transaction_bundle([patient]))

    assert len(files) == 1
    key, content = files[0]
    assert key == "Patient-abc"
    assert content == serialize_resource(patient)


def test_split_keeps_entry_order():
    resources = [
        {"resourceType": "Patient", "id": "p1"},
        {"resourceType": "Observation", "id": "o1"},
    ]

    files = split_bundle(assemble_transaction_bundle(resources))

    assert [f.key for f in files] == ["Patient-p1", "Observation-o1"]
    assert files[1].filename == "Observation-o1.json"


def test_split_skips_null_entries():
    bundle = {
        "resourceType": "Bundle",
        "type": "collection",
        "entry": [None, {"resource": {"resourceType": "Patient", "id": "p1"}}],
    }

    files = split_bundle(bundle)

    assert len(files) == 1
    assert files[0].key == "Patient-p1"


def test_split_missing_id_raises():
    bundle = {
        "resourceType": "Bundle",
        "type": "collection",
        "entry": [
            {"resource": {"resourceType": "Patient", "id": "p1"}},
            {"resource": {"resourceType": "Observation"}},
        ],
    }

    with pytest.raises(MissingIdentifierError, match="entry 1 missing an id"):
        split_bundle(bundle)


def test_split_entry_without_resource_raises():
    bundle = {"resourceType": "Bundle", "type": "collection", "entry": [{"fullUrl": "x"}]}

    with pytest.raises(MissingIdentifierError):
        split_bundle(bundle)


def test_split_rejects_non_object_entries():
    bundle = {"resourceType": "Bundle", "type": "collection", "entry": ["x"]}

    with pytest.raises(NotABundleError, match="entry 0 is not an object"):
        split_bundle(bundle)


def test_split_rejects_non_object_resource():
    bundle = {"resourceType": "Bundle", "type": "collection", "entry": [{"resource": "x"}]}

    with pytest.raises(NotABundleError, match="not an object"):
        split_bundle(bundle)


def test_split_rejects_resource_without_type():
    bundle = {"resourceType": "Bundle", "type": "collection", "entry": [{"resource": {"id": "x"}}]}

    with pytest.raises(NotABundleError, match="no resourceType"):
        split_bundle(bundle)


def test_split_message_bundle_fails_on_header_without_id():
    bundle = assemble_message_bundle([{"resourceType": "Patient", "id": "p1"}], "a", "http://x")

    with pytest.raises(MissingIdentifierError):
        split_bundle(bundle)


def test_split_does_not_deduplicate():
    patient = {"resourceType": "Patient", "id": "p1"}

    files = split_bundle(assemble_transaction_bundle([patient, patient]))

    assert [f.key for f in files] == ["Patient-p1", "Patient-p1"]


def test_split_rejects_non_bundle():
    with pytest.raises(NotABundleError):
        split_bundle({"resourceType": "Patient", "id": "p1"})

    with pytest.raises(NotABundleError):
        split_bundle(["not", "a", "bundle"])


def test_split_empty_bundle():
    assert split_bundle({"resourceType": "Bundle", "type": "collection"}) == []


def test_parse_bundle():
    content = json.dumps({"resourceType": "Bundle", "type": "searchset", "entry": []}).encode()

    assert parse_bundle(content)["type"] == "searchset"


def test_parse_bundle_rejects_other_resources():
    with pytest.raises(NotABundleError, match="Patient"):
        parse_bundle(b'{"resourceType": "Patient", "id": "p1"}')


def test_write_resource_files(tmp_path):
    files = [
        ResourceFile(key="Patient-p1", content=b'{"resourceType": "Patient", "id": "p1"}'),
        ResourceFile(key="Observation-o1", content=b'{"resourceType": "Observation", "id": "o1"}'),
    ]

    paths = write_resource_files(files, tmp_path / "out")

    assert [p.name for p in paths] == ["Patient-p1.json", "Observation-o1.json"]
    assert json.loads(paths[0].read_text())["id"] == "p1"


def test_write_resource_files_later_duplicate_wins(tmp_path):
    files = [
        ResourceFile(key="Patient-p1", content=b"first"),
        ResourceFile(key="Patient-p1", content=b"second"),
    ]

    write_resource_files(files, tmp_path)

    assert (tmp_path / "Patient-p1.json").read_bytes() == b"second"
