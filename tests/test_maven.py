from dataclasses import dataclass, field

import pytest

from buildmodel.assembler import assemble_model
from buildmodel.config import BuildModelConfig
from buildmodel.detect import load_host
from buildmodel.errors import SnapshotError
from buildmodel.hosts import maven


@dataclass
class FakeDep:
    groupId: str
    artifactId: str
    version: str
    scope: str | None = None


@dataclass
class FakeNode:
    dep: FakeDep | None
    children: list = field(default_factory=list)


class FakePom:
    def __init__(self, artifact_id, modules=(), plugins=()):
        self.groupId = "org.example"
        self.artifactId = artifact_id
        self._values = {
            "modules/module": list(modules),
            "build/plugins/plugin/artifactId": list(plugins),
        }

    def values(self, path):
        return self._values.get(path, [])


class FakeModel:
    def __init__(self, tree):
        self.tree = tree

    def dependencies(self):
        return [], self.tree


@pytest.fixture
def maven_build(tmp_path, monkeypatch):
    (tmp_path / "pom.xml").write_text("<project/>")
    (tmp_path / "core").mkdir()
    (tmp_path / "core" / "pom.xml").write_text("<project/>")
    (tmp_path / "ghost").mkdir()

    guava = FakeNode(
        FakeDep("com.google.guava", "guava", "33.0.0-jre"),
        [FakeNode(FakeDep("com.google.guava", "failureaccess", "1.0.2"))],
    )
    junit = FakeNode(FakeDep("junit", "junit", "4.13.2", scope="test"))
    servlet = FakeNode(FakeDep("javax.servlet", "servlet-api", "2.5", scope="provided"))
    poms = {
        tmp_path / "pom.xml": (
            FakePom("parent", modules=["core", "ghost"], plugins=["maven-compiler-plugin"]),
            FakeModel(FakeNode(None, [])),
        ),
        tmp_path / "core" / "pom.xml": (
            FakePom("core"),
            FakeModel(FakeNode(None, [guava, junit, servlet])),
        ),
    }
    monkeypatch.setattr(maven, "_open_pom", lambda path: poms[path])
    return tmp_path


def test_modules_become_subprojects(maven_build):
    root = maven.load_maven_project(maven_build)

    assert root.name == "parent"
    assert root.plugins == ["maven-compiler-plugin"]
    assert root.build_file == maven_build / "pom.xml"
    core, ghost = root.subprojects
    assert core.name == "core"
    assert core.parent is root
    assert ghost is None


def test_scopes_map_to_configurations(maven_build):
    root = maven.load_maven_project(maven_build)
    core = root.subprojects[0]

    tree = assemble_model(root).children[0].dependency_root
    configs = {c.name: [d.name for d in c.children] for c in tree.children}

    assert [c.name for c in core.configurations] == [
        "compileClasspath",
        "runtimeClasspath",
        "testCompileClasspath",
        "testRuntimeClasspath",
    ]
    assert configs["compileClasspath"] == [
        "com.google.guava:guava:33.0.0-jre",
        "javax.servlet:servlet-api:2.5",
    ]
    assert configs["runtimeClasspath"] == ["com.google.guava:guava:33.0.0-jre"]
    assert "junit:junit:4.13.2" in configs["testRuntimeClasspath"]


def test_parent_without_dependencies_has_empty_tree(maven_build):
    model = assemble_model(maven.load_maven_project(maven_build))

    assert model.dependency_root.children == []


def test_lifecycle_phases_are_tasks(maven_build):
    model = assemble_model(maven.load_maven_project(maven_build))

    assert [t.name for t in model.tasks][:3] == ["clean", "validate", "compile"]
    (core,) = model.children
    (package,) = [t for t in core.tasks if t.name == "package"]
    assert package.path == ":core:package"
    assert package.group == "lifecycle"
    assert package.build_file == str(maven_build / "core" / "pom.xml")


def test_unreadable_pom_is_absent(tmp_path, monkeypatch):
    (tmp_path / "pom.xml").write_text("<project")

    def broken(path):
        raise ValueError("bad pom")

    monkeypatch.setattr(maven, "_open_pom", broken)

    assert maven.load_maven_project(tmp_path) is None


def test_pom_file_target_loads_its_maven_project(maven_build):
    root = load_host(maven_build / "pom.xml", BuildModelConfig())

    assert root.name == "parent"
    assert root.project_dir == maven_build


def test_non_snapshot_file_is_not_read_as_snapshot(tmp_path):
    build_file = tmp_path / "build.xml"
    build_file.write_text("<project/>")

    with pytest.raises(SnapshotError, match="Could not detect"):
        load_host(build_file, BuildModelConfig())
