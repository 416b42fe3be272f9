import json
from pathlib import Path

import pytest

from buildmodel.assembler import assemble_model
from buildmodel.errors import SnapshotError
from buildmodel.hosts.snapshot import load_snapshot, snapshot_from_dict

SNAPSHOT_YAML = """\
sourceRoots: [buildSrc/src/main/java]
components:
  "g:a:1": ["g:b:1"]
  "g:b:1": ["g:a:1", {requested: "g:gone:+", unresolved: true}]
project:
  name: demo
  scriptClasspath: [cache/plugin.jar]
  plugins: [java, application]
  extensions:
    - name: application
      methods:
        - {name: getMainClass, modifiers: [public, abstract]}
        - {name: applicationName, parameterTypes: [java.lang.String]}
      fields: [{name: legacyMain, annotations: [Deprecated]}]
  configurations:
    - name: compileClasspath
      dependencies: ["g:a:1"]
    - name: implementation
      resolvable: false
      dependencies: ["g:a:1"]
  tasks:
    - {name: build, group: build, description: Assembles and tests.}
  subprojects:
    - name: app
      buildFile: build.gradle.kts
      tasks:
        - {name: run, group: application}
    - null
"""


def test_load_yaml_snapshot(tmp_path):
    path = tmp_path / "buildmodel-snapshot.yaml"
    path.write_text(SNAPSHOT_YAML)

    snapshot = load_snapshot(path)
    root = snapshot.root

    assert root.name == "demo"
    assert root.project_dir == tmp_path.resolve()
    assert root.script_classpath == [str((tmp_path / "cache" / "plugin.jar").resolve())]
    assert snapshot.source_roots == [(tmp_path / "buildSrc/src/main/java").resolve()]
    app, missing = root.subprojects
    assert missing is None
    assert app.parent is root
    assert app.project_dir == (tmp_path / "app").resolve()
    assert app.build_file.name == "build.gradle.kts"
    assert app.tasks[0].path == ":app:run"


def test_snapshot_model_end_to_end(tmp_path):
    path = tmp_path / "buildmodel-snapshot.yaml"
    path.write_text(SNAPSHOT_YAML)

    model = assemble_model(load_snapshot(path).root)

    (config_node,) = model.dependency_root.children
    assert config_node.name == "compileClasspath"
    (a,) = config_node.children
    (b,) = a.children
    (a_again,) = b.children
    assert (a.name, b.name, a_again.name) == ("g:a:1", "g:b:1", "g:a:1")
    assert a_again.children == []

    (closure,) = model.closures
    assert [(f.name, f.deprecated) for f in closure.fields] == [
        ("mainClass", False),
        ("legacyMain", True),
    ]
    assert [t.name for t in model.tasks] == ["build", "run"]


def test_load_json_snapshot(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"project": {"name": "solo", "tasks": [{"name": "check"}]}}))

    root = load_snapshot(path).root

    assert root.name == "solo"
    assert root.tasks[0].path == ":check"
    assert root.tasks[0].group is None


def test_selected_differs_from_requested():
    snapshot = snapshot_from_dict(
        {
            "project": {
                "name": "demo",
                "configurations": [
                    {
                        "name": "runtimeClasspath",
                        "dependencies": [{"requested": "g:a:1.+", "selected": "g:a:1.4"}],
                    }
                ],
            }
        },
        base_dir=Path("/work"),
    )

    (config,) = snapshot.root.configurations
    (edge,) = config.resolution_result.root.dependencies
    assert edge.requested == "g:a:1.+"
    assert str(edge.selected.module_version) == "g:a:1.4"


def test_configuration_components_override_shared_table():
    snapshot = snapshot_from_dict(
        {
            "components": {"g:a:1": ["g:b:1"]},
            "project": {
                "name": "demo",
                "configurations": [
                    {
                        "name": "compileClasspath",
                        "components": {"g:a:1": []},
                        "dependencies": ["g:a:1"],
                    }
                ],
            },
        },
        base_dir=Path("/work"),
    )

    (config,) = snapshot.root.configurations
    (edge,) = config.resolution_result.root.dependencies
    assert edge.selected.dependencies == []


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"project": None},
        {"project": {"dir": "."}},
        {"project": {"name": "demo", "configurations": [{"name": "c", "dependencies": "g:a:1"}]}},
        {"project": {"name": "demo", "configurations": [{"name": "c", "dependencies": ["nope"]}]}},
        {"project": {"name": "demo", "tasks": [{"group": "build"}]}},
        {
            "project": {
                "name": "demo",
                "extensions": [
                    {"name": "ext", "methods": [{"name": "getFoo", "modifiers": "public"}]}
                ],
            }
        },
    ],
)
def test_malformed_snapshots_raise(data, tmp_path):
    with pytest.raises(SnapshotError):
        snapshot_from_dict(data, tmp_path)


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("project: [unclosed\n")

    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_member_modifiers_default_to_public():
    snapshot = snapshot_from_dict(
        {
            "project": {
                "name": "demo",
                "extensions": [
                    {
                        "name": "ext",
                        "methods": [{"name": "getFoo", "modifiers": ["public", "abstract"]}],
                        "fields": ["plain"],
                    }
                ],
            }
        },
        base_dir=Path("/work"),
    )

    (ext,) = snapshot.root.extensions
    (method,) = ext.public_type.methods
    (plain,) = ext.public_type.fields
    assert method.modifiers == frozenset({"public", "abstract"})
    assert plain.is_public
