from pathlib import Path

from buildmodel.closures import extract_closures
from buildmodel.config import BuildModelConfig
from buildmodel.context import BuildContext
from buildmodel.describers import JavaSourceDescriber
from buildmodel.hosts.memory import MemoryExtension

DOCS_EXTENSION = """\
package org.example.docs;

import org.gradle.api.provider.Property;

public abstract class DocsExtension {
    public String title;

    @Deprecated
    public boolean legacy;

    private int hidden;

    public abstract Property<String> getOutputDir();

    public String getTitle() {
        return title;
    }

    public void include(String pattern, String... more) {
    }

    protected abstract void internal();

    public interface Theme {
        Property<String> getName();

        @Deprecated
        Property<String> getColor();
    }
}
"""


def _write_source(root: Path) -> Path:
    source = root / "org" / "example" / "docs" / "DocsExtension.java"
    source.parent.mkdir(parents=True)
    source.write_text(DOCS_EXTENSION)
    return source


def test_abstract_class_members(tmp_path):
    _write_source(tmp_path)

    description = JavaSourceDescriber([tmp_path]).describe("org.example.docs.DocsExtension")

    assert [m.name for m in description.methods] == [
        "getOutputDir",
        "getTitle",
        "include",
    ]
    assert description.methods[2].parameter_types == ["String", "String[]"]
    assert [f.name for f in description.fields] == ["title", "legacy"]


def test_closure_from_java_source(tmp_path):
    _write_source(tmp_path)
    context = BuildContext(config=BuildModelConfig(source_roots=[tmp_path]))

    (closure,) = extract_closures(
        [MemoryExtension("docs", "org.example.docs.DocsExtension")], context
    )

    assert [(f.name, f.deprecated) for f in closure.fields] == [
        ("outputDir", False),
        ("title", False),
        ("legacy", True),
    ]


def test_nested_interface_methods_are_abstract(tmp_path):
    _write_source(tmp_path)
    context = BuildContext(config=BuildModelConfig(source_roots=[tmp_path]))

    (closure,) = extract_closures(
        [MemoryExtension("theme", "org.example.docs.DocsExtension$Theme")], context
    )

    assert [(f.name, f.deprecated) for f in closure.fields] == [
        ("name", False),
        ("color", True),
    ]


def test_missing_source_is_undescribed(tmp_path):
    context = BuildContext(config=BuildModelConfig(source_roots=[tmp_path]))

    (closure,) = extract_closures(
        [MemoryExtension("gone", "org.example.Missing")], context
    )

    assert closure.methods == [] and closure.fields == []
    assert context.diagnostics.undescribed_extensions == 1


def test_unparseable_source_is_undescribed(tmp_path):
    broken = tmp_path / "Broken.java"
    broken.write_text("public class Broken { void oops( }")

    assert JavaSourceDescriber([tmp_path]).describe("Broken") is None
