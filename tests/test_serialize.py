from buildmodel.model import (
    CapabilityClosure,
    DependencyKind,
    DependencyNode,
    FieldDescriptor,
    MethodDescriptor,
    ProjectNode,
    TaskInfo,
)
from buildmodel.renderer.serialize import model_to_dict


def _model():
    return ProjectNode(
        is_root=True,
        project_dir="/w",
        tasks=[
            TaskInfo("clean", "", ":clean", "demo", "/w/build.gradle", "demo", None),
        ],
        dependency_root=DependencyNode(
            "demo",
            DependencyKind.PROJECT,
            [DependencyNode("compileClasspath", DependencyKind.CONFIGURATION)],
        ),
        plugins=["java"],
        closures=[
            CapabilityClosure(
                "java",
                [MethodDescriptor("withSourcesJar", [], True)],
                [FieldDescriptor("toolchain")],
            )
        ],
        script_classpath=["/cache/a.jar"],
    )


def test_task_keeps_empty_group_and_drops_missing_description():
    (task,) = model_to_dict(_model())["tasks"]

    assert task["group"] == ""
    assert "description" not in task


def test_dependency_and_closure_shapes():
    data = model_to_dict(_model())

    assert data["dependencyNode"] == {
        "name": "demo",
        "type": "PROJECT",
        "children": [{"name": "compileClasspath", "type": "CONFIGURATION", "children": []}],
    }
    assert data["pluginClosures"] == [
        {
            "name": "java",
            "methods": [{"name": "withSourcesJar", "parameterTypes": [], "deprecated": True}],
            "fields": [{"name": "toolchain", "deprecated": False}],
        }
    ]
    assert data["scriptClasspaths"] == ["/cache/a.jar"]
