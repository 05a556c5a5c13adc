"""Shared fixtures: small lockfiles written into a temporary tree."""

import json

import pytest


NPM_LOCK = {
    "name": "demo",
    "version": "1.0.0",
    "lockfileVersion": 3,
    "requires": True,
    "packages": {
        "": {"name": "demo", "version": "1.0.0"},
        "node_modules/debug": {"version": "4.4.2"},
        "node_modules/ms": {"version": "2.1.3"},
        "node_modules/@scope/chalk": {"version": "5.6.1"},
        "node_modules/wrap/node_modules/ansi-styles": {"version": "6.2.2"},
        "node_modules/color": {"version": "5.0.10"},
    },
}

YARN_LOCK = """\
# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"chalk@^5.6.1":
  version "5.6.1"
  resolved "https://registry.yarnpkg.com/chalk/-/chalk-5.6.1.tgz"
  integrity sha512-abc

debug@^4.0.0, debug@^4.4.0:
  version "4.4.1"
  resolved "https://registry.yarnpkg.com/debug/-/debug-4.4.1.tgz"
  dependencies:
    ms "^2.1.3"

"@scope/strip-ansi@^7.1.1":
  version "7.1.1"
"""

PNPM_LOCK = """\
lockfileVersion: '6.0'

dependencies:
  chalk:
    specifier: ^5.0.0
    version: 5.6.0

packages:

  /ansi-regex@6.2.1:
    resolution: {integrity: sha512-abc}
    engines: {node: '>=12'}
    dev: false

  /@scope/color@5.0.1:
    resolution: {integrity: sha512-def}
    dev: false

  /chalk@5.6.0:
    resolution: {integrity: sha512-ghi}
    dev: false
"""


@pytest.fixture
def npm_lock_text():
    return json.dumps(NPM_LOCK, indent=2)


@pytest.fixture
def project_tree(tmp_path, npm_lock_text):
    """A directory with one lockfile of each kind plus unrelated files."""
    (tmp_path / "web").mkdir()
    (tmp_path / "web" / "package-lock.json").write_text(npm_lock_text)
    (tmp_path / "web" / "package.json").write_text('{"name": "web"}')
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "yarn.lock").write_text(YARN_LOCK)
    (tmp_path / "tools").mkdir()
    (tmp_path / "tools" / "pnpm-lock.yaml").write_text(PNPM_LOCK)
    (tmp_path / "README.md").write_text("# demo\n")
    return tmp_path
