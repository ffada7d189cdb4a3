from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pinkfrog.config import Settings, get_settings
from pinkfrog.main import app


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A site root with a ``light`` decoration and a home page."""
    write(tmp_path, "src/settings.yml", "decoration: light\n")
    write(tmp_path, "src/content/default/index.md", "---\ntitle: Home\n---\n\n# Welcome")
    write(tmp_path, "src/decoration/light/templates/index.html", "<html><title>{{title}}</title><main>{{content}}</main></html>")
    write(tmp_path, "src/decoration/light/markdown/h1.html", '<h1 class="light-title">{{content}}</h1>')
    write(tmp_path, "src/decoration/light/markdown/p.html", '<p class="light-copy">{{content}}</p>')
    write(tmp_path, "src/decoration/light/components/card/template.html", '<div class="card">{{content}}</div>')
    write(tmp_path, "src/decoration/light/components/card/example.md", ":::card\nHello\n:::")
    write(tmp_path, "src/decoration/light/components/card/example.html", '<div class="card">Hello</div>')
    return tmp_path


@pytest.fixture
def client(site: Path):
    app.dependency_overrides[get_settings] = lambda: Settings(cms_dir=site)
    app.state.limiter._storage.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
