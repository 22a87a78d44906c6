"""Tests for the project metadata in pyproject.toml."""

import os
import tomllib

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def pyproject():
    with open(os.path.join(ROOT, "pyproject.toml"), "rb") as f:
        return tomllib.load(f)


class TestPyproject:
    def test_no_internal_documents_as_readme(self, pyproject):
        readme = pyproject["project"].get("readme")
        assert readme is None or os.path.basename(readme).upper().startswith("README")

    def test_declared_modules_exist(self, pyproject):
        for module in pyproject["tool"]["setuptools"]["py-modules"]:
            assert os.path.exists(os.path.join(ROOT, f"{module}.py")), module

    def test_runtime_dependencies(self, pyproject):
        names = {dep.split(">")[0].split("=")[0] for dep in pyproject["project"]["dependencies"]}
        assert names == {"pydantic", "rich", "httpx", "python-dotenv", "fastapi", "uvicorn"}

    def test_cli_entry_point(self, pyproject):
        assert pyproject["project"]["scripts"]["cra-engine"] == "main:main"
