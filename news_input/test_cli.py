import json

from news_input.__main__ import load_source, main


def test_load_source_reads_existing_files(tmp_path):
    path = tmp_path / "story.pdf"
    path.write_bytes(b"%PDF-1.4")
    assert load_source(str(path)) == b"%PDF-1.4"
    assert load_source("https://example.com/story") == "https://example.com/story"
    assert load_source("just some pasted words") == "just some pasted words"


def test_main_prints_envelope(capsys):
    code = main(["Hello world, this is a test.", "--type", "text"])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["success"] is True
    assert out["language"] == "en"


def test_main_writes_output_file(tmp_path, capsys):
    target = tmp_path / "result.json"
    code = main(["hi", "--type", "text", "--output", str(target)])
    assert code == 1
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["error"] == "Text content too short after cleaning"
    assert "result.json" in capsys.readouterr().out
