"""Stowage bounded context — cargo hold storage and waste management.

Handles item placement across capacity-bounded storage containers,
rearrangement planning, retrieval estimation, the waste disposal lifecycle
(mark, plan return, undock, confirm return), and efficiency reporting.
All records are standard CQRS aggregates (not event sourced).
"""

from protean.domain import Domain

from stowage.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

stowage = Domain(name="stowage")
