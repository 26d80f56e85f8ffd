from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from cvgen import ConversionConvertibleGenerator, VersionRegistry
from cvgen.errors import DirectoryListError, RenderError, WriteError
from cvgen.types import ResourceDescriptor
from tests.infrastructure import (
    FailingRenderer,
    FailingWriter,
    FakeRenderer,
    FakeWriter,
    make_apis_tree,
    write_boilerplate,
)


def _gen(root: Path, **kw) -> ConversionConvertibleGenerator:
    kw.setdefault("group", "s3.aws.upbound.io")
    kw.setdefault("hub_version", "v1beta1")
    return ConversionConvertibleGenerator(root=root, **kw)


def test_one_file_per_spoke_and_none_for_hub(apis, descriptors):
    writer = FakeWriter()
    result = _gen(apis.root, renderer=FakeRenderer(), writer=writer).generate(descriptors)

    assert sorted(writer.files) == [apis.conversion_file("v1alpha1"), apis.conversion_file("v1alpha2")]
    assert apis.conversion_file("v1beta1") not in writer.files
    assert result.written is True
    assert result.spoke_versions == ["v1alpha1", "v1alpha2"]


def test_renderer_receives_manifest_vars(apis, descriptors):
    renderer = FakeRenderer()
    _gen(apis.root, renderer=renderer, writer=FakeWriter()).generate(descriptors)
    assert renderer.calls == [
        ("conversion", {
            "APIVersion": "v1alpha1",
            "Resources": [{"CRD": {"Kind": "Bucket"}}, {"CRD": {"Kind": "BucketPolicy"}}],
        }),
        ("conversion", {"APIVersion": "v1alpha2", "Resources": [{"CRD": {"Kind": "Bucket"}}]}),
    ]


def test_bucket_scenario_end_to_end(tmp_path: Path):
    tree = make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": ["zz_bucket_types.go"]})
    write_boilerplate(tmp_path)
    descs = [ResourceDescriptor(kind="Bucket", short_group="s3")]

    result = _gen(tmp_path).generate(descs)

    assert tree.generated_files() == [tree.conversion_file("v1alpha1")]
    assert result.manifests[0].to_vars() == {"APIVersion": "v1alpha1", "Resources": [{"CRD": {"Kind": "Bucket"}}]}
    assert result.registry.as_dict() == {"s3.Bucket": ["v1alpha1"]}

    text = tree.conversion_file("v1alpha1").read_text(encoding="utf-8")
    assert text.startswith("/*\nCopyright 2024 The Test Authors.\n*/\n\n// Code generated by cvgen. DO NOT EDIT.\n")
    assert "package v1alpha1\n" in text
    assert "func (tr *Bucket) ConvertTo(dstRaw conversion.Hub) error {" in text
    assert "func (tr *Bucket) ConvertFrom(srcRaw conversion.Hub) error {" in text
    assert text.endswith("}\n")


def test_generated_file_mode(tmp_path: Path):
    tree = make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": []})
    write_boilerplate(tmp_path)
    _gen(tmp_path, file_mode=0o640).generate([ResourceDescriptor(kind="Bucket", short_group="s3")])
    mode = stat.S_IMODE(os.stat(tree.conversion_file("v1alpha1")).st_mode)
    assert mode == 0o640


def test_missing_scan_root_writes_nothing(tmp_path: Path, descriptors):
    writer = FakeWriter()
    with pytest.raises(DirectoryListError) as ei:
        _gen(tmp_path, renderer=FakeRenderer(), writer=writer).generate(descriptors)
    assert ei.value.path == tmp_path / "apis" / "s3"
    assert writer.files == {}


def test_unreadable_spoke_writes_nothing(apis, descriptors, monkeypatch):
    broken = apis.version_dir("v1alpha2")
    real_scandir = os.scandir

    def scandir(path="."):
        if Path(path) == broken:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    writer = FakeWriter()
    with pytest.raises(DirectoryListError):
        _gen(apis.root, renderer=FakeRenderer(), writer=writer).generate(descriptors)
    assert writer.files == {}


def test_render_failure_writes_nothing(apis, descriptors):
    writer = FakeWriter()
    with pytest.raises(RenderError) as ei:
        _gen(apis.root, renderer=FailingRenderer("v1alpha2"), writer=writer).generate(descriptors)
    assert ei.value.path == apis.conversion_file("v1alpha2")
    assert str(apis.conversion_file("v1alpha2")) in str(ei.value)
    assert writer.files == {}


def test_write_failure_names_the_file(apis, descriptors):
    target = apis.conversion_file("v1alpha1")
    with pytest.raises(WriteError) as ei:
        _gen(apis.root, renderer=FakeRenderer(), writer=FailingWriter(target)).generate(descriptors)
    assert ei.value.path == target
    assert isinstance(ei.value.__cause__, PermissionError)


def test_missing_license_header_is_a_render_error(tmp_path: Path):
    tree = make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": []})
    with pytest.raises(RenderError, match="license header"):
        _gen(tmp_path).generate([ResourceDescriptor(kind="Bucket", short_group="s3")])
    assert tree.generated_files() == []


def test_plan_does_not_render_or_write(apis, descriptors):
    renderer, writer = FakeRenderer(), FakeWriter()
    result = _gen(apis.root, renderer=renderer, writer=writer).plan(descriptors)
    assert result.written is False
    assert [f.path for f in result.files] == [apis.conversion_file("v1alpha1"), apis.conversion_file("v1alpha2")]
    assert renderer.calls == []
    assert writer.files == {}


def test_injected_registry_accumulates_across_groups(tmp_path: Path):
    make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": []}, group_prefix="s3")
    make_apis_tree(tmp_path, {"v1alpha1": ["zz_queue_types.go"], "v1beta1": []}, group_prefix="sqs")
    reg = VersionRegistry(entries={"ec2.Instance": ["v1alpha1"]})

    _gen(tmp_path, group="s3.aws.upbound.io", renderer=FakeRenderer(), writer=FakeWriter()).generate(
        [ResourceDescriptor(kind="Bucket", short_group="s3")], registry=reg
    )
    result = _gen(tmp_path, group="sqs.aws.upbound.io", renderer=FakeRenderer(), writer=FakeWriter()).generate(
        [ResourceDescriptor(kind="Queue", short_group="sqs")], registry=reg
    )

    assert result.registry is reg
    assert reg.as_dict() == {
        "ec2.Instance": ["v1alpha1"],
        "s3.Bucket": ["v1alpha1"],
        "sqs.Queue": ["v1alpha1"],
    }


def test_generate_twice_is_independent(apis, descriptors):
    gen = _gen(apis.root, renderer=FakeRenderer(), writer=FakeWriter())
    first = gen.generate(descriptors)
    second = gen.generate(descriptors)
    assert first.registry == second.registry
    assert first.registry is not second.registry
    assert first.manifests == second.manifests


def test_legacy_keying_through_generator(tmp_path: Path):
    make_apis_tree(tmp_path, {
        "v1alpha1": ["zz_bucket_types.go"],
        "v1alpha2": ["zz_bucket_types.go"],
        "v1beta1": [],
    })
    gen = _gen(tmp_path, renderer=FakeRenderer(), writer=FakeWriter(), registry_keying="legacy")
    result = gen.generate([ResourceDescriptor(kind="Bucket", short_group="s3")])
    assert result.registry.as_dict() == {"s3.Bucket": ["v1alpha2"]}


def test_default_license_header_path(tmp_path: Path):
    gen = _gen(tmp_path)
    assert gen.license_header_path == tmp_path / "hack" / "boilerplate.go.txt"
    assert gen.scan_dir == tmp_path / "apis" / "s3"


def test_render_failure_leaves_injected_registry_untouched(apis, descriptors):
    reg = VersionRegistry(entries={"ec2.Instance": ["v1alpha1"]})
    with pytest.raises(RenderError):
        _gen(apis.root, renderer=FailingRenderer("v1alpha2"), writer=FakeWriter()).generate(
            descriptors, registry=reg
        )
    assert reg.as_dict() == {"ec2.Instance": ["v1alpha1"]}


def test_listing_failure_leaves_injected_registry_untouched(apis, descriptors, monkeypatch):
    broken = apis.version_dir("v1alpha2")
    real_scandir = os.scandir

    def scandir(path="."):
        if Path(path) == broken:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    reg = VersionRegistry(entries={"ec2.Instance": ["v1alpha1"]})
    with pytest.raises(DirectoryListError):
        _gen(apis.root, renderer=FakeRenderer(), writer=FakeWriter()).plan(descriptors, registry=reg)
    # v1alpha1 was scanned before the failure; its appends must not leak
    assert reg.as_dict() == {"ec2.Instance": ["v1alpha1"]}


def test_write_failure_leaves_injected_registry_untouched(apis, descriptors):
    reg = VersionRegistry()
    writer = FailingWriter(apis.conversion_file("v1alpha2"))
    with pytest.raises(WriteError):
        _gen(apis.root, renderer=FakeRenderer(), writer=writer).generate(descriptors, registry=reg)
    assert list(writer.files) == [apis.conversion_file("v1alpha1")]
    assert len(reg) == 0


def test_injected_legacy_registry_reads_its_own_plain_keys(tmp_path: Path):
    make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": []})
    reg = VersionRegistry(keying="legacy", entries={"Bucket": ["v0"]})
    _gen(tmp_path, renderer=FakeRenderer(), writer=FakeWriter()).generate(
        [ResourceDescriptor(kind="Bucket", short_group="s3")], registry=reg
    )
    assert reg.versions("s3.Bucket") == ["v0", "v1alpha1"]


def test_symlink_to_hub_is_not_a_spoke(tmp_path: Path):
    tree = make_apis_tree(tmp_path, {"v1alpha1": ["zz_bucket_types.go"], "v1beta1": ["zz_bucket_types.go"]})
    try:
        os.symlink(tree.version_dir("v1beta1"), tree.version_dir("v1beta2"), target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    writer = FakeWriter()
    gen = _gen(tmp_path, renderer=FakeRenderer(), writer=writer)
    result = gen.generate([ResourceDescriptor(kind="Bucket", short_group="s3")])

    assert gen.spoke_versions() == ["v1alpha1"]
    assert list(writer.files) == [tree.conversion_file("v1alpha1")]
    assert result.registry.as_dict() == {"s3.Bucket": ["v1alpha1"]}


def test_unreadable_hub_does_not_stop_generation(apis, descriptors, monkeypatch):
    hub = apis.version_dir("v1beta1")
    real_scandir = os.scandir
    listed = []

    def scandir(path="."):
        listed.append(Path(path))
        if Path(path) == hub:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    writer = FakeWriter()
    result = _gen(apis.root, renderer=FakeRenderer(), writer=writer).generate(descriptors)

    assert hub not in listed
    assert sorted(writer.files) == [apis.conversion_file("v1alpha1"), apis.conversion_file("v1alpha2")]
    assert result.spoke_versions == ["v1alpha1", "v1alpha2"]
