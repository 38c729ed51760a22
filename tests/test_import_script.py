import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "import_posts_csv.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("import_posts_csv", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body or {}
        self.text = str(self._body)

    def json(self):
        return self._body


def write_csv(path):
    path.write_text(
        "titulo,conteudo\n"
        "Frações,Aula sobre frações\n"
        ",sem título\n"
        "Geometria,Triângulos\n",
        encoding="utf-8",
    )


def test_read_rows_skips_incomplete_lines(script, tmp_path):
    csv_path = tmp_path / "posts.csv"
    write_csv(csv_path)

    assert list(script.read_rows(str(csv_path))) == [
        {"title": "Frações", "content": "Aula sobre frações"},
        {"title": "Geometria", "content": "Triângulos"},
    ]


def test_main_logs_in_and_creates_posts(script, tmp_path, monkeypatch, capsys):
    csv_path = tmp_path / "posts.csv"
    write_csv(csv_path)
    monkeypatch.setattr(script, "CSV_PATH", str(csv_path))
    monkeypatch.setenv("IMPORT_EMAIL", "professor@escola.com")
    monkeypatch.setenv("IMPORT_PASSWORD", "senha123")

    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append((url, json, headers))
        if url.endswith("/auth/login"):
            return FakeResponse(200, {"token": "tok", "user_type": "PROFESSOR"})
        return FakeResponse(201)

    monkeypatch.setattr(script.requests, "post", fake_post)

    script.main()

    assert [c[0].rsplit("/", 1)[-1] for c in calls] == ["login", "posts", "posts"]
    assert calls[1][2]["Authorization"] == "Bearer tok"
    assert "Posts criados: 2 | falhas: 0" in capsys.readouterr().out


def test_main_refuses_aluno(script, monkeypatch):
    monkeypatch.setenv("IMPORT_EMAIL", "aluno@escola.com")
    monkeypatch.setenv("IMPORT_PASSWORD", "senha123")
    monkeypatch.setattr(
        script.requests,
        "post",
        lambda *a, **kw: FakeResponse(200, {"token": "tok", "user_type": "ALUNO"}),
    )

    with pytest.raises(SystemExit):
        script.main()
