from __future__ import annotations

from minibundle.startup import ENABLED_ENV, compress_on_startup

from conftest import write

PROPS = (
    "minibundle.js.input_dir=static/js\n"
    "minibundle.js.output_file=static/app.min.js\n"
    "minibundle.js.excludes=vendor\n"
    "minibundle.css.input_dir=static/css\n"
    "minibundle.css.output_file=static/app.min.css\n"
)


def _app(tmp_path):
    write(tmp_path / "minibundle.properties", PROPS)
    write(tmp_path / "static" / "js" / "a.js", "var x = 1;")
    write(tmp_path / "static" / "js" / "vendor" / "lib.js", "var lib;")
    write(tmp_path / "static" / "css" / "a.css", "a { color: red }")
    return tmp_path


def test_disabled_by_default(tmp_path, monkeypatch):
    monkeypatch.delenv(ENABLED_ENV, raising=False)
    app = _app(tmp_path)

    assert compress_on_startup(app) is None
    assert (app / "static" / "js" / "a.js").exists()


def test_enabled_explicitly(tmp_path, console):
    app = _app(tmp_path)

    results = compress_on_startup(app, enabled=True, console=console)

    assert [r.status for r in results] == ["ok", "ok"]
    assert (app / "static" / "app.min.js").exists()
    assert (app / "static" / "app.min.css").exists()
    assert (app / "static" / "js" / "vendor" / "lib.js").exists()
    assert not (app / "static" / "css").exists()


def test_enabled_from_environment(tmp_path, monkeypatch, console):
    monkeypatch.setenv(ENABLED_ENV, "true")
    app = _app(tmp_path)

    results = compress_on_startup(app, console=console)

    assert results is not None
    assert (app / "static" / "app.min.js").exists()


def test_explicit_false_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(ENABLED_ENV, "1")
    assert compress_on_startup(_app(tmp_path), enabled=False) is None


def test_custom_properties_location(tmp_path, console):
    app = _app(tmp_path)
    conf = write(tmp_path / "conf" / "assets.properties", "minibundle.css.input_dir=static/css\n")

    results = compress_on_startup(app, enabled=True, properties=conf, console=console)

    # paths resolve against the app root, not the properties file
    assert results[1].status == "ok"
    assert (app / "static" / "css" / "a.min.css").exists()
