"""Tests for document loading and the file runner."""

import json
import sys

import pytest
import run_diff
from discodiff import (
    DiffOptions,
    DiffRunner,
    DocumentLoadError,
    EngineConfig,
    Method,
    Schema,
    diff_files,
    load_document,
    parse_document,
)


STORAGE = {
    "kind": "discovery#restDescription",
    "id": "storage:v1",
    "name": "storage",
    "version": "v1",
    "revision": "20161109",
    "title": "Cloud Storage JSON API",
    "rootUrl": "https://www.googleapis.com/",
    "servicePath": "storage/v1/",
    "basePath": "/storage/v1/",
    "documentationLink": "https://developers.google.com/storage/docs/json_api/",
    "schemas": {
        "Bucket": {
            "id": "Bucket",
            "type": "object",
            "description": "A bucket.",
            "properties": {"name": {"type": "string"}},
        },
        "Buckets": {
            "id": "Buckets",
            "type": "object",
            "items": {"$ref": "Bucket"},
        },
        "Visibility": {
            "type": "string",
            "enum": ["PUBLIC", "PRIVATE"],
            "enumDescriptions": ["Anyone", "Owner only"],
            "default": "PRIVATE",
        },
    },
    "resources": {
        "objects": {
            "methods": {
                "get": {
                    "id": "storage.objects.get",
                    "path": "b/{bucket}/o/{object}",
                    "httpMethod": "GET",
                    "supportsMediaDownload": True,
                    "parameters": {"bucket": {"type": "string", "location": "path"}},
                    "parameterOrder": ["bucket", "object"],
                    "response": {"$ref": "Object"},
                    "scopes": ["https://www.googleapis.com/auth/devstorage.read_only"],
                }
            }
        },
        "buckets": {
            "methods": {
                "list": {"id": "storage.buckets.list", "path": "b", "httpMethod": "GET"},
            },
            "resources": {
                "acl": {"methods": {"delete": {"id": "storage.acl.delete", "httpMethod": "DELETE"}}},
            },
        },
    },
}


class TestParseDocument:
    """Test conversion of Discovery mappings."""

    def setup_method(self):
        self.doc = parse_document(STORAGE)

    def test_top_level_fields(self):
        assert self.doc.id == "storage:v1"
        assert self.doc.name == "storage"
        assert self.doc.revision == "20161109"
        assert self.doc.root_url == "https://www.googleapis.com/"
        assert self.doc.service_path == "storage/v1/"
        assert self.doc.base_path == "/storage/v1/"

    def test_schemas_named_by_key(self):
        assert set(self.doc.schemas) == {"Bucket", "Buckets", "Visibility"}
        assert self.doc.schemas["Visibility"].name == "Visibility"
        assert self.doc.schemas["Visibility"].enums == ("PUBLIC", "PRIVATE")
        assert self.doc.schemas["Visibility"].default == "PRIVATE"
        assert self.doc.schemas["Buckets"].items == Schema(ref="Bucket")

    def test_resources_sorted_by_name(self):
        assert [r.name for r in self.doc.resources] == ["buckets", "objects"]
        buckets = self.doc.resources[0]
        assert [r.name for r in buckets.resources] == ["acl"]
        assert buckets.resources[0].methods[0].http_method == "DELETE"

    def test_method_fields(self):
        get = self.doc.resources[1].methods[0]
        assert isinstance(get, Method)
        assert get.name == "get"
        assert get.supports_media_download is True
        assert get.parameter_order == ("bucket", "object")
        assert get.response == "Object"
        assert get.request == ""

    def test_empty_mapping(self):
        doc = parse_document({})
        assert doc.schemas == {}
        assert doc.resources == ()

    def test_not_a_mapping(self):
        with pytest.raises(DocumentLoadError):
            parse_document(["storage"])

    def test_wrong_string_type(self):
        with pytest.raises(DocumentLoadError):
            parse_document({"revision": ["20161109"]})

    def test_wrong_bool_type(self):
        data = {"resources": {"objects": {"methods": {"get": {"supportsMediaDownload": "yes"}}}}}
        with pytest.raises(DocumentLoadError):
            parse_document(data)

    def test_non_string_resource_name(self):
        with pytest.raises(DocumentLoadError):
            parse_document({"resources": {1: {}}})


class TestLoadDocument:
    """Test loading documents from files."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps(STORAGE))

        doc = load_document(path)
        assert doc == parse_document(STORAGE)

    def test_yaml_file_with_unquoted_revision(self, tmp_path):
        path = tmp_path / "storage.yaml"
        path.write_text("name: storage\nrevision: 20161109\n")

        doc = load_document(str(path))
        assert doc.revision == "20161109"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError) as exc:
            load_document(tmp_path / "missing.json")
        assert exc.value.path.endswith("missing.json")

    def test_invalid_syntax(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ invalid: [")
        with pytest.raises(DocumentLoadError) as exc:
            load_document(path)
        assert exc.value.reason

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(DocumentLoadError) as exc:
            load_document(path)
        assert exc.value.path == str(path)
        assert exc.value.reason

    def test_directory_path(self, tmp_path):
        with pytest.raises(DocumentLoadError) as exc:
            load_document(tmp_path)
        assert exc.value.path == str(tmp_path)

    def test_invalid_content_reports_path(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(DocumentLoadError) as exc:
            load_document(path)
        assert exc.value.path == str(path)


class TestDiffRunner:
    """Test comparing document files."""

    def _write(self, tmp_path, name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    def test_renders_changes(self, tmp_path):
        newer = json.loads(json.dumps(STORAGE))
        newer["revision"] = "20191101"
        del newer["schemas"]["Visibility"]
        newer["resources"]["objects"]["methods"]["get"]["supportsMediaDownload"] = False

        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", newer)

        assert diff_files(old_path, new_path) == (
            'M .Revision [ "20161109" ==> "20191101" ]\n'
            '- <Schema> Schemas.Visibility\n'
            'M <Resource> Resources.objects\n'
            '  M <Method> Resources.objects.Methods.get\n'
            '    M .SupportsMediaDownload [ "true" ==> "false" ]\n'
        )

    def test_unchanged_files(self, tmp_path):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", STORAGE)

        runner = DiffRunner(old_path, new_path)
        assert runner.run() == []
        assert runner.render() == ""

    def test_engine_config_applied(self, tmp_path):
        newer = dict(STORAGE, revision="20191101")
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", newer)

        config = EngineConfig(options=DiffOptions.ALL.without("versioning"))
        assert DiffRunner(old_path, new_path, config).run() == []

    def test_documents_cached(self, tmp_path):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        runner = DiffRunner(old_path, old_path)
        assert runner.old is runner.old


class TestRunDiff:
    """Test the command-line script."""

    def _write(self, tmp_path, name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    def _main(self, monkeypatch, *args):
        monkeypatch.setattr(sys, "argv", ["run_diff.py", *args])
        return run_diff.main()

    def test_no_differences(self, tmp_path, monkeypatch, capsys):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", STORAGE)

        assert self._main(monkeypatch, old_path, new_path) == 0
        assert capsys.readouterr().out == ""

    def test_differences(self, tmp_path, monkeypatch, capsys):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", dict(STORAGE, revision="20191101"))

        assert self._main(monkeypatch, old_path, new_path) == 1
        assert capsys.readouterr().out == 'M .Revision [ "20161109" ==> "20191101" ]\n'

    def test_skip_category(self, tmp_path, monkeypatch):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", dict(STORAGE, revision="20191101"))

        assert self._main(monkeypatch, old_path, new_path, "--skip", "versioning") == 0

    def test_only_category_keeps_identifiers(self, tmp_path, monkeypatch, capsys):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(
            tmp_path, "new.json", dict(STORAGE, revision="20191101", name="gcs")
        )

        assert self._main(monkeypatch, old_path, new_path, "--only", "schemas") == 1
        assert capsys.readouterr().out == 'M .Name [ "storage" ==> "gcs" ]\n'

    def test_json_report(self, tmp_path, monkeypatch):
        old_path = self._write(tmp_path, "old.json", STORAGE)
        new_path = self._write(tmp_path, "new.json", dict(STORAGE, revision="20191101"))
        report_path = tmp_path / "report.json"

        assert self._main(monkeypatch, old_path, new_path, "--json", str(report_path)) == 1
        assert json.loads(report_path.read_text()) == [{
            "change_type": "MODIFY",
            "element_kind": "STRING_FIELD",
            "element_id": "Revision",
            "old_value": "20161109",
            "new_value": "20191101",
        }]

    def test_undecodable_file(self, tmp_path, monkeypatch, capsys):
        old_path = tmp_path / "old.json"
        old_path.write_bytes(b"\xff\xfe")
        new_path = self._write(tmp_path, "new.json", STORAGE)

        assert self._main(monkeypatch, str(old_path), new_path) == 2
        assert "Error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, monkeypatch):
        new_path = self._write(tmp_path, "new.json", STORAGE)
        assert self._main(monkeypatch, str(tmp_path / "missing.json"), new_path) == 2
