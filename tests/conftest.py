"""Shared fixtures: a reader, an in-memory parse helper and on-disk C# trees."""

from pathlib import Path

import pytest
import structlog

from solidify.config import Settings, get_settings
from solidify.source.csharp import CSharpReader


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep every test independent of the developer's environment and .env."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def reader() -> CSharpReader:
    return CSharpReader()


@pytest.fixture
def parse(reader):
    """Parse C# text and return the SourceUnit."""
    def _parse(text: str, path: str = "Sample.cs"):
        return reader.read(text, path)
    return _parse


@pytest.fixture
def declaration(parse):
    """Parse C# text and return the declaration with the given name."""
    def _declaration(text: str, name: str):
        unit = parse(text)
        for decl in unit.declarations:
            if decl.name == name:
                return decl, unit
        raise AssertionError(f"{name} not declared")
    return _declaration


# A class that only breaks SRP: two method categories, an interface base,
# no fields or properties and no parameters
SRP_ONLY_CLASS = """\
public class {name} : IReport
{{
    public decimal CalculateTotal() {{ return 0; }}
    public void SaveReport() {{ }}
}}
"""

CLEAN_CLASS = """\
public class Clean : IClean
{
    public void Run() { }
}
"""


@pytest.fixture
def project(tmp_path) -> Path:
    """A small C# tree: two SRP offenders, one clean file and build output."""
    root = tmp_path / "src"
    (root / "sub").mkdir(parents=True)
    (root / "bin").mkdir()
    (root / "b.cs").write_text(SRP_ONLY_CLASS.format(name="Second"), encoding="utf-8")
    (root / "sub" / "a.cs").write_text(SRP_ONLY_CLASS.format(name="First"), encoding="utf-8")
    (root / "clean.cs").write_text(CLEAN_CLASS, encoding="utf-8")
    (root / "bin" / "generated.cs").write_text(SRP_ONLY_CLASS.format(name="Generated"), encoding="utf-8")
    (root / "notes.txt").write_text("not C#", encoding="utf-8")
    return root
