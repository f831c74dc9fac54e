import os

from application.services.env_resolver import EnvResolver, Missing
from domain.site_config import InvocationMode
from infrastructure.env_file import EnvFilePreloader, parse_env_lines, read_env_file


def test_parse_skips_blank_comment_and_malformed_lines():
    parsed = parse_env_lines(["FOO=bar", "# baz=qux", "", "not a pair", "EMPTY="])
    assert parsed == {"FOO": "bar", "EMPTY": ""}


def test_parse_splits_on_first_equals_and_keeps_whitespace():
    parsed = parse_env_lines(["URL=https://x/?a=b", " SPACED = v "])
    assert parsed["URL"] == "https://x/?a=b"
    assert parsed[" SPACED "] == " v "


def test_parse_later_duplicate_wins():
    assert parse_env_lines(["A=1", "A=2"]) == {"A": "2"}


def test_indented_comment_is_not_a_comment():
    # only a leading '#' marks a comment
    assert parse_env_lines([" #A=1"]) == {" #A": "1"}


def test_read_env_file_handles_crlf(tmp_path):
    path = tmp_path / "server.env"
    path.write_bytes(b"FOO=bar\r\nBAZ=qux\r\n")
    assert read_env_file(path) == {"FOO": "bar", "BAZ": "qux"}


def test_preload_only_makes_assignments_resolvable(env_file):
    env_file.write_text("FOO=bar\n# baz=qux\n\n", encoding="utf-8")
    environ: dict = {}

    applied = EnvFilePreloader(env_file).preload(environ, InvocationMode.CLI)

    assert applied == ["FOO"]
    resolver = EnvResolver(environ)
    assert resolver.require("FOO") == "bar"
    assert isinstance(resolver.resolve("baz"), Missing)
    assert isinstance(resolver.resolve("# baz"), Missing)


def test_preload_skipped_in_server_mode(env_file):
    env_file.write_text("FOO=bar\n", encoding="utf-8")
    environ: dict = {}

    assert EnvFilePreloader(env_file).preload(environ, InvocationMode.SERVER) is None
    assert environ == {}


def test_preload_absent_file_is_silently_skipped(tmp_path):
    environ: dict = {}
    preloader = EnvFilePreloader(tmp_path / "missing.env")

    assert preloader.preload(environ, InvocationMode.CLI) is None
    assert environ == {}
    assert not preloader.done


def test_preload_runs_at_most_once(env_file):
    env_file.write_text("FOO=bar\n", encoding="utf-8")
    environ: dict = {}
    preloader = EnvFilePreloader(env_file)
    preloader.preload(environ, InvocationMode.CLI)

    environ["FOO"] = "changed"
    env_file.write_text("FOO=again\n", encoding="utf-8")

    assert preloader.preload(environ, InvocationMode.CLI) is None
    assert environ["FOO"] == "changed"


def test_preload_overrides_existing_values(env_file):
    env_file.write_text("DB_HOST=db.internal\n", encoding="utf-8")
    environ = {"DB_HOST": "localhost"}

    EnvFilePreloader(env_file).preload(environ, InvocationMode.CLI)

    assert environ["DB_HOST"] == "db.internal"


def test_parse_skips_lines_that_cannot_enter_the_environment():
    parsed = parse_env_lines(["=orphan", "NUL\x00KEY=x", "NUL_VALUE=a\x00b", "FOO=bar"])
    assert parsed == {"FOO": "bar"}


def test_empty_key_does_not_stop_later_lines_reaching_os_environ(env_file, monkeypatch):
    monkeypatch.setenv("BOOTSTRAP_TEST_FOO", "old")
    env_file.write_bytes(b"=orphan\nBOOTSTRAP_TEST_FOO=bar\n")

    applied = EnvFilePreloader(env_file).preload(os.environ, InvocationMode.CLI)

    assert applied == ["BOOTSTRAP_TEST_FOO"]
    assert os.environ["BOOTSTRAP_TEST_FOO"] == "bar"


def test_undecodable_bytes_reach_environment_unchanged(env_file, monkeypatch):
    monkeypatch.setenv("BOOTSTRAP_TEST_PASSWORD", "old")
    env_file.write_bytes(b"BOOTSTRAP_TEST_PASSWORD=p\xe4ss\n")

    EnvFilePreloader(env_file).preload(os.environ, InvocationMode.CLI)

    assert os.environb[b"BOOTSTRAP_TEST_PASSWORD"] == b"p\xe4ss"


def test_lines_split_on_newline_only(tmp_path):
    path = tmp_path / "server.env"
    path.write_bytes(b"DB_PASSWORD=ab\x0ccd\nA=1\x0b2\x1c3\nB=x\ry\r\n")
    assert read_env_file(path) == {
        "DB_PASSWORD": "ab\x0ccd",
        "A": "1\x0b2\x1c3",
        "B": "x\ry",
    }


def test_unicode_line_separators_stay_in_values(tmp_path):
    path = tmp_path / "server.env"
    path.write_bytes("SALT=a\u2028b\x85c\n".encode("utf-8"))
    assert read_env_file(path) == {"SALT": "a\u2028b\x85c"}
