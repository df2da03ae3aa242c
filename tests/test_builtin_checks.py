"""Tests for the built-in checks."""

import io

import pytest
from packaging.version import Version

from upgrade_lint.check.base import CheckGroup
from upgrade_lint.check.conditions import (
    ANNOTATION_COMPONENT_MANAGEMENT_STATE,
    ANNOTATION_IMPACTED_WORKLOAD_COUNT,
    ANNOTATION_OPENSHIFT_VERSION,
    CONDITION_TYPE_AVAILABLE,
    CONDITION_TYPE_COMPATIBLE,
    CONDITION_TYPE_CONFIGURED,
    REASON_INSUFFICIENT_DATA,
    REASON_RESOURCE_NOT_FOUND,
)
from upgrade_lint.check.result import ConditionStatus, Impact
from upgrade_lint.check.target import Target
from upgrade_lint.checks import (
    CodeFlareRemovalCheck,
    ModelMeshRemovalCheck,
    OpenShiftVersionCheck,
    RayImpactedWorkloadsCheck,
    new_registry,
)
from upgrade_lint.cluster.resources import CLUSTER_VERSION, RAY_CLUSTER
from upgrade_lint.exceptions import ClusterAccessDeniedError
from tests.fixtures import (
    FakeClusterReader,
    cluster_version,
    platform_cluster,
    ray_cluster,
)


def _target(cluster, current="2.17.0", target="3.0.0") -> Target:
    return Target(
        client=cluster,
        current_version=Version(current),
        target_version=Version(target),
    )


class TestRegistry:
    """Test the built-in registry."""

    def test_builtin_ids(self) -> None:
        assert [c.id for c in new_registry()] == [
            "dependencies.openshift.version-requirement",
            "components.codeflare.removal",
            "components.modelmesh.removal",
            "workloads.ray.impacted-workloads",
        ]

    def test_each_registry_is_fresh(self) -> None:
        assert new_registry() is not new_registry()
        assert len(new_registry()) == 4

    @pytest.mark.parametrize(
        ("current", "target", "applies"),
        [
            ("2.17.0", "3.0.0", True),
            ("2.17.0", "2.25.0", False),
            ("3.0.0", "3.1.0", False),
        ],
    )
    def test_applicability(self, ctx, fake_cluster, current, target, applies) -> None:
        for check in new_registry():
            assert check.can_apply(ctx, _target(fake_cluster, current, target)) is applies


class TestComponentRemovalChecks:
    """Test the CodeFlare and ModelMesh removal checks."""

    @pytest.mark.parametrize(
        ("check_cls", "component"),
        [(CodeFlareRemovalCheck, "codeflare"), (ModelMeshRemovalCheck, "modelmeshserving")],
    )
    @pytest.mark.parametrize("state", ["Managed", "Unmanaged"])
    def test_enabled_component_blocks(self, ctx, check_cls, component, state) -> None:
        cluster = platform_cluster(components={component: state})

        result = check_cls().validate(ctx, _target(cluster))

        condition = result.conditions[0]
        assert condition.type == CONDITION_TYPE_COMPATIBLE
        assert condition.status is ConditionStatus.FALSE
        assert condition.impact is Impact.BLOCKING
        assert f"(state: {state})" in condition.message
        assert result.annotations[ANNOTATION_COMPONENT_MANAGEMENT_STATE] == state
        assert result.group == CheckGroup.COMPONENT.value
        result.ensure_valid()

    @pytest.mark.parametrize(
        ("check_cls", "component"),
        [(CodeFlareRemovalCheck, "codeflare"), (ModelMeshRemovalCheck, "modelmeshserving")],
    )
    def test_removed_component_passes(self, ctx, check_cls, component) -> None:
        cluster = platform_cluster(components={component: "Removed"})

        result = check_cls().validate(ctx, _target(cluster))

        assert result.conditions[0].status is ConditionStatus.TRUE
        assert result.impact is Impact.NONE
        assert "ready for 3.x upgrade" in result.conditions[0].message

    def test_component_not_configured(self, ctx) -> None:
        cluster = platform_cluster(components={})

        result = CodeFlareRemovalCheck().validate(ctx, _target(cluster))

        condition = result.conditions[0]
        assert condition.type == CONDITION_TYPE_CONFIGURED
        assert condition.reason == REASON_RESOURCE_NOT_FOUND
        assert condition.impact is Impact.NONE

    def test_no_data_science_cluster(self, ctx, fake_cluster) -> None:
        result = CodeFlareRemovalCheck().validate(ctx, _target(fake_cluster))

        condition = result.conditions[0]
        assert condition.type == CONDITION_TYPE_AVAILABLE
        assert condition.status is ConditionStatus.FALSE
        assert condition.impact is Impact.ADVISORY

    def test_access_errors_propagate(self, ctx) -> None:
        from upgrade_lint.cluster.resources import DATA_SCIENCE_CLUSTER

        cluster = FakeClusterReader().fail(
            DATA_SCIENCE_CLUSTER, ClusterAccessDeniedError("forbidden")
        )
        with pytest.raises(ClusterAccessDeniedError):
            CodeFlareRemovalCheck().validate(ctx, _target(cluster))


class TestOpenShiftVersionCheck:
    """Test the OpenShift minimum version check."""

    @pytest.mark.parametrize("version", ["4.19.0", "4.20.3"])
    def test_supported_version(self, ctx, version) -> None:
        cluster = FakeClusterReader().add(CLUSTER_VERSION, cluster_version(version))

        result = OpenShiftVersionCheck().validate(ctx, _target(cluster))

        assert result.impact is Impact.NONE
        assert result.annotations[ANNOTATION_OPENSHIFT_VERSION] == version

    def test_old_version_blocks(self, ctx) -> None:
        cluster = FakeClusterReader().add(CLUSTER_VERSION, cluster_version("4.18.9"))

        result = OpenShiftVersionCheck().validate(ctx, _target(cluster))

        assert result.impact is Impact.BLOCKING
        assert "4.18.9 does not meet" in result.conditions[0].message

    def test_desired_version_used_during_install(self, ctx) -> None:
        cluster = FakeClusterReader().add(
            CLUSTER_VERSION, cluster_version("4.19.1", completed=False)
        )

        result = OpenShiftVersionCheck().validate(ctx, _target(cluster))

        assert result.impact is Impact.NONE

    def test_undetectable_version(self, ctx, fake_cluster) -> None:
        result = OpenShiftVersionCheck().validate(ctx, _target(fake_cluster))

        condition = result.conditions[0]
        assert condition.reason == REASON_INSUFFICIENT_DATA
        assert condition.status is ConditionStatus.FALSE
        assert "Unable to detect OpenShift version" in condition.message


class TestRayImpactedWorkloadsCheck:
    """Test the RayCluster impact check."""

    def test_codeflare_managed_clusters_reported(self, ctx) -> None:
        cluster = FakeClusterReader().add(
            RAY_CLUSTER,
            ray_cluster("team-b", "trainer"),
            ray_cluster("team-a", "tuner"),
            ray_cluster("team-a", "plain", codeflare_managed=False),
        )

        result = RayImpactedWorkloadsCheck().validate(ctx, _target(cluster))

        condition = result.conditions[0]
        assert condition.impact is Impact.ADVISORY
        assert condition.message.startswith("Found 2 CodeFlare-managed RayCluster(s)")
        assert "team-a/tuner (CodeFlare-managed)" in condition.message
        assert [(o.namespace, o.name) for o in result.impacted_objects] == [
            ("team-a", "tuner"),
            ("team-b", "trainer"),
        ]
        assert result.annotations[ANNOTATION_IMPACTED_WORKLOAD_COUNT] == "2"
        result.ensure_valid()

    def test_no_clusters(self, ctx) -> None:
        cluster = FakeClusterReader().serve(RAY_CLUSTER)

        result = RayImpactedWorkloadsCheck().validate(ctx, _target(cluster))

        assert result.impact is Impact.NONE
        assert result.conditions[0].message.startswith(
            "No CodeFlare-managed RayClusters found"
        )

    def test_missing_crd_counts_as_none(self, ctx, fake_cluster) -> None:
        result = RayImpactedWorkloadsCheck().validate(ctx, _target(fake_cluster))
        assert result.impact is Impact.NONE
        assert result.annotations[ANNOTATION_IMPACTED_WORKLOAD_COUNT] == "0"

    def test_custom_verbose_output(self, ctx) -> None:
        cluster = FakeClusterReader().add(RAY_CLUSTER, ray_cluster("team-a", "tuner"))
        check = RayImpactedWorkloadsCheck()
        result = check.validate(ctx, _target(cluster))
        out = io.StringIO()

        check.format_verbose_output(out, result)

        assert out.getvalue() == "    - team-a/tuner (CodeFlare-managed)\n"
