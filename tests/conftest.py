from pathlib import Path

import pytest

from cvgen.types import ResourceDescriptor
from tests.infrastructure import make_apis_tree, write_boilerplate


@pytest.fixture
def descriptors() -> list[ResourceDescriptor]:
    return [
        ResourceDescriptor(kind="Bucket", short_group="s3"),
        ResourceDescriptor(kind="BucketPolicy", short_group="s3"),
    ]


@pytest.fixture
def apis(tmp_path: Path):
    """
    Minimal s3 group: hub v1beta1 plus two spokes.

    v1alpha1 holds Bucket and BucketPolicy, v1alpha2 holds Bucket and a
    spoke-only Legacy type, v1beta1 (hub) holds everything.
    """
    tree = make_apis_tree(tmp_path, {
        "v1alpha1": ["zz_bucket_types.go", "zz_bucketpolicy_types.go", "zz_generated.deepcopy.go"],
        "v1alpha2": ["zz_bucket_types.go", "zz_legacy_types.go", "doc.go"],
        "v1beta1": ["zz_bucket_types.go", "zz_bucketpolicy_types.go"],
    })
    (tree.scan_dir / "README.md").write_text("not a version\n", encoding="utf-8")
    write_boilerplate(tmp_path)
    return tree
