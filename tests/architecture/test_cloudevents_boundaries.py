"""Layering rules for cqrs_ddd_cloudevents."""

from pytest_archon import archrule


def test_matching_layer_is_independent() -> None:
    """Patterns, classification and attribute resolution must not know about encoding."""
    for module in ("patterns", "classification", "attributes"):
        (
            archrule(f"{module}_independence")
            .match(f"cqrs_ddd_cloudevents.{module}")
            .should_not_import("cqrs_ddd_cloudevents.formats*")
            .should_not_import("cqrs_ddd_cloudevents.transformer")
            .should_not_import("cqrs_ddd_cloudevents.builder")
            .check("cqrs_ddd_cloudevents")
        )


def test_envelope_is_leaf() -> None:
    """The envelope model must not depend on resolution or encoding."""
    (
        archrule("envelope_is_leaf")
        .match("cqrs_ddd_cloudevents.envelope")
        .should_not_import("cqrs_ddd_cloudevents.formats*")
        .should_not_import("cqrs_ddd_cloudevents.attributes")
        .should_not_import("cqrs_ddd_cloudevents.classification")
        .should_not_import("cqrs_ddd_cloudevents.transformer")
        .check("cqrs_ddd_cloudevents")
    )


def test_formats_do_not_import_pipeline() -> None:
    """Event formats plug into the transformer, never the other way round."""
    (
        archrule("formats_independence")
        .match("cqrs_ddd_cloudevents.formats*")
        .should_not_import("cqrs_ddd_cloudevents.transformer")
        .should_not_import("cqrs_ddd_cloudevents.settings")
        .should_not_import("cqrs_ddd_cloudevents.classification")
        .check("cqrs_ddd_cloudevents")
    )


def test_no_cqrs_runtime_dependencies() -> None:
    """The transform stays free of persistence and transport packages."""
    (
        archrule("cloudevents_is_pure")
        .match("cqrs_ddd_cloudevents*")
        .should_not_import("cqrs_ddd_persistence_*")
        .should_not_import("cqrs_ddd_messaging*")
        .check("cqrs_ddd_cloudevents")
    )
