"""Architecture tests using pytest-archon.

These tests enforce the layer boundaries of the navigation and IAM bounded
contexts and the isolation between them.
"""

from pytest_archon import archrule


class TestNavigationDomainLayerBoundaries:
    """The navigation domain is pure business logic."""

    def test_domain_does_not_import_outer_layers(self):
        (
            archrule("navigation_domain_is_pure")
            .match("navigation.domain*")
            .should_not_import(
                "navigation.application*",
                "navigation.infrastructure*",
                "navigation.presentation*",
                "navigation.dependencies*",
            )
            .check("navigation")
        )

    def test_domain_does_not_import_frameworks(self):
        (
            archrule("navigation_domain_no_frameworks")
            .match("navigation.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("navigation")
        )


class TestNavigationPortsAndApplication:
    def test_ports_do_not_import_implementations(self):
        (
            archrule("navigation_ports_no_infrastructure")
            .match("navigation.ports*")
            .should_not_import("navigation.infrastructure*", "navigation.application*")
            .check("navigation")
        )

    def test_application_depends_on_ports_not_adapters(self):
        """Application services receive adapters through their constructors."""
        (
            archrule("navigation_application_no_infrastructure")
            .match("navigation.application*")
            .should_not_import(
                "navigation.infrastructure*",
                "navigation.presentation*",
                "fastapi*",
            )
            .check("navigation")
        )

    def test_inner_layers_do_not_import_iam(self):
        """Only the HTTP edge of navigation knows about IAM."""
        (
            archrule("navigation_core_no_iam")
            .match("navigation.domain*", "navigation.ports*", "navigation.application*")
            .should_not_import("iam*")
            .check("navigation")
        )


class TestIAMBoundedContextIsolation:
    def test_iam_does_not_import_navigation(self):
        (
            archrule("iam_no_navigation")
            .match("iam*")
            .should_not_import("navigation*")
            .check("iam")
        )

    def test_iam_domain_does_not_import_outer_layers(self):
        (
            archrule("iam_domain_is_pure")
            .match("iam.domain*")
            .should_not_import(
                "iam.application*",
                "iam.infrastructure*",
                "iam.presentation*",
                "fastapi*",
                "sqlalchemy*",
            )
            .check("iam")
        )


class TestSharedKernelIndependence:
    def test_shared_kernel_does_not_import_bounded_contexts(self):
        (
            archrule("shared_kernel_independent")
            .match("shared_kernel*")
            .should_not_import("iam*", "navigation*", "infrastructure*")
            .check("shared_kernel")
        )
