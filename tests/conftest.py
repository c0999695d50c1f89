import pytest

from qfilter.registry import Registry

SCHEMAS_YAML = """\
entities:
  users:
    fields:
      name: {queryable: true}
      email: {queryable: true}
      age: {queryable: false}
      passwordHash: ~
  orders:
    fields:
      status: {queryable: true}
      total: {}
"""


@pytest.fixture
def schemas_file(tmp_path):
    """Write a two-entity schemas file and return its path."""
    path = tmp_path / "schemas.yaml"
    path.write_text(SCHEMAS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def registry(schemas_file):
    reg = Registry(schemas_file)
    reg.load_schemas()
    return reg
