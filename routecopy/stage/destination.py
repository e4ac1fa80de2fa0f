from __future__ import annotations

from routecopy.core.errors import NoDestinationMatch
from routecopy.core.logger import setup_logger
from routecopy.core.matching import PathMatcher, glob_match
from routecopy.core.models import DestinationSpec, FixedDestination

logger = setup_logger(__name__)


def resolve_destination(
    spec: DestinationSpec,
    original_relative_path: str,
    matcher: PathMatcher = glob_match,
) -> str:
    """Pick the destination root for a file.

    Routed destinations are tried in declaration order against the unstripped
    relative path; the first matching pattern wins.
    """

    if isinstance(spec, FixedDestination):
        return spec.root

    for pattern, root in spec.routes:
        if matcher(original_relative_path, pattern):
            logger.debug("Routed %s via %r -> %s", original_relative_path, pattern, root)
            return root

    logger.debug(
        "No route for %s (patterns: %s)",
        original_relative_path,
        ", ".join(pattern for pattern, _ in spec.routes),
    )
    raise NoDestinationMatch(original_relative_path)
