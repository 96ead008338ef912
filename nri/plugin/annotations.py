"""Pod- and container-scoped custom annotations."""

from __future__ import annotations

from nri.api.container import PodSandbox

ANNOTATION_DOMAIN = "noderesource.dev"
"""Domain of the package's own annotations."""

REQUIRED_PLUGINS_ANNOTATION = "required-plugins." + ANNOTATION_DOMAIN
"""Annotation listing plugins that must process containers at creation."""


def get_effective_annotation(
    pod: PodSandbox | None, key: str, container: str
) -> str | None:
    """Return the annotation of a pod that applies to the given container.

    Container-scoped annotations (<key>/container.<name>) take precedence
    over pod-scoped ones (<key>/pod, or just <key>). Returns None if
    none is set.
    """
    annotations = pod.annotations if pod is not None else None
    if not annotations:
        return None
    for candidate in (f"{key}/container.{container}", f"{key}/pod", key):
        if candidate in annotations:
            return annotations[candidate]
    return None