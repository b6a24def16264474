import httpx
import respx
from bill_parser import cli
from bill_parser.services.storage.handoff_sqlite import SQLiteHandoffStore

PARSE_URL = "https://parser.test/api/parse-bill"


def test_show_without_bill(tmp_path, capsys):
    code = cli.main(["--backend", "sqlite", "--db", str(tmp_path / "handoff.db"), "show"])

    assert code == 0
    assert "Upload an image to get started" in capsys.readouterr().out


@respx.mock
def test_upload_then_show(tmp_path, capsys):
    respx.post(PARSE_URL).mock(return_value=httpx.Response(
        200, json={"items": [{"name": "Tea", "price": "10.50"}, {"name": "Cake", "price": "4.3"}]}
    ))
    image = tmp_path / "bill.png"
    image.write_bytes(b"\x89PNG fake")
    db = str(tmp_path / "handoff.db")

    code = cli.main(["--backend", "sqlite", "--db", db, "upload", str(image), "--parse-url", PARSE_URL])

    assert code == 0
    out = capsys.readouterr().out
    assert "Tea" in out
    assert "14.80" in out
    assert SQLiteHandoffStore(db).get("billData") is not None

    assert cli.main(["--backend", "sqlite", "--db", db, "show"]) == 0
    assert "14.80" in capsys.readouterr().out


def test_upload_rejects_non_image(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    notes = tmp_path / "notes.txt"
    notes.write_text("not a bill")

    code = cli.main(["upload", str(notes), "--parse-url", PARSE_URL])

    assert code == 1
    assert "Please select a valid image file" in capsys.readouterr().out


def test_upload_missing_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code = cli.main(["upload", str(tmp_path / "missing.jpg")])

    assert code == 1
    assert "File not found" in capsys.readouterr().out


def test_default_backend_persists_between_runs():
    args = cli.build_parser().parse_args(["show"])

    assert args.backend == "sqlite"


@respx.mock
def test_upload_then_show_with_default_backend(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    respx.post(PARSE_URL).mock(return_value=httpx.Response(200, json={"items": [{"name": "Tea", "price": "2"}]}))
    image = tmp_path / "bill.jpg"
    image.write_bytes(b"\xff\xd8fake")
    db = str(tmp_path / "handoff.db")

    assert cli.main(["--db", db, "upload", str(image), "--parse-url", PARSE_URL]) == 0
    capsys.readouterr()

    assert cli.main(["--db", db, "show"]) == 0
    assert "2.00" in capsys.readouterr().out
