from webdemos.assets import ASSETS, DIRECTORIES, create_app, load_templates


def test_load_templates_only_template_files():
    templates = load_templates()
    assert set(templates) == {"/html/bar.tmpl", "/html/index.tmpl"}
    assert all(not ASSETS[name].is_dir for name in templates)


def test_directories_list_existing_assets():
    for directory, entries in DIRECTORIES.items():
        assert ASSETS[directory].is_dir
        for entry in entries:
            assert f"{directory.rstrip('/')}/{entry}" in ASSETS


def test_index_renders_foo():
    response = create_app().test_client().get("/")
    assert response.status_code == 200
    assert "<p>Hello, World</p>" in response.get_data(as_text=True)
    assert response.mimetype == "text/html"


def test_bar_renders_bar():
    response = create_app().test_client().get("/bar")
    assert response.status_code == 200
    assert "Can you see this? → World" in response.get_data(as_text=True)


def test_unknown_route_is_404():
    assert create_app().test_client().get("/missing").status_code == 404