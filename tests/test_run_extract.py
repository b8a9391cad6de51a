import json

from strspan.extraction.rules import validate_rules
from strspan.extraction.run_extract import main, process_document

RULES = [
    {"name": "title", "kind": "between", "start": "<title>", "end": "</title>"},
    {"name": "ids", "kind": "all_matches", "start": "#", "content_pattern": r"\d+"},
    {"name": "broken", "kind": "pattern", "start": "x", "content_pattern": ".", "end": "\\"},
]


def _write_inputs(tmp_path):
    input_dir = tmp_path / "docs"
    input_dir.mkdir()
    (input_dir / "d1.json").write_text(
        json.dumps({"doc_id": "d1", "text": "<title>Report</title> refs #12 and #7"}),
        encoding="utf-8",
    )
    (input_dir / "d2.json").write_text(json.dumps({"doc_id": "d2", "text": "nothing here"}), encoding="utf-8")
    rules_path = tmp_path / "rules.json"
    rules_path.write_text(json.dumps(RULES), encoding="utf-8")
    return input_dir, rules_path


def test_process_document_collects_stats() -> None:
    results, stats = process_document({"text": "<title>Report</title> #1"}, validate_rules(RULES))
    assert results["title"]["values"] == ["Report"]
    assert results["ids"]["values"] == ["1"]
    assert stats["rules_matched"] == 2
    assert stats["errors"] == ["broken"]


def test_process_document_without_text_field() -> None:
    results, stats = process_document({"body": "x"}, validate_rules(RULES))
    assert stats["values"] == 0
    assert results["title"]["values"] == []


def test_main_writes_outputs(tmp_path) -> None:
    input_dir, rules_path = _write_inputs(tmp_path)
    output_dir = tmp_path / "out"
    code = main(
        [
            "--input",
            str(input_dir),
            "--rules",
            str(rules_path),
            "--output-dir",
            str(output_dir),
            "--log-file",
            str(tmp_path / "logs" / "extract.log"),
            "--no-progress",
        ]
    )
    assert code == 0
    payload = json.loads((output_dir / "d1.json").read_text(encoding="utf-8"))
    assert payload["results"]["ids"]["values"] == ["12", "7"]
    assert payload["results"]["title"]["spans"][0]["start"] == 7
    assert (output_dir / "d2.json").exists()


def test_main_missing_input(tmp_path) -> None:
    rules_path = tmp_path / "rules.json"
    rules_path.write_text("[]", encoding="utf-8")
    code = main(
        ["--input", str(tmp_path / "missing"), "--rules", str(rules_path), "--log-file", str(tmp_path / "x.log")]
    )
    assert code == 1


def test_main_bad_rules(tmp_path) -> None:
    input_dir, _ = _write_inputs(tmp_path)
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"name": "p", "kind": "pattern"}]), encoding="utf-8")
    code = main(["--input", str(input_dir), "--rules", str(bad), "--log-file", str(tmp_path / "x.log")])
    assert code == 2


def test_main_skips_non_object_documents_and_names_output_by_file(tmp_path) -> None:
    input_dir, rules_path = _write_inputs(tmp_path)
    (input_dir / "d0.json").write_text(json.dumps(["not", "a", "document"]), encoding="utf-8")
    (input_dir / "d3.json").write_text(
        json.dumps({"doc_id": "team/report", "text": "<title>Nested</title>"}),
        encoding="utf-8",
    )
    output_dir = tmp_path / "out"
    code = main(
        [
            "--input",
            str(input_dir),
            "--rules",
            str(rules_path),
            "--output-dir",
            str(output_dir),
            "--log-file",
            str(tmp_path / "extract.log"),
            "--no-progress",
        ]
    )
    assert code == 0
    assert not (output_dir / "d0.json").exists()
    payload = json.loads((output_dir / "d3.json").read_text(encoding="utf-8"))
    assert payload["doc_id"] == "team/report"
    assert payload["results"]["title"]["values"] == ["Nested"]
    assert (output_dir / "d1.json").exists()
