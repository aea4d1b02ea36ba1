"""
Prometheus metrics for transition attempts.

Metrics are registered once per process and labelled by blueprint name, so
any number of blueprints and machines share the same collectors.
"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Label for transition names no rule was ever added under
UNKNOWN_TRANSITION = "<unknown>"

TRANSITIONS = Counter(
    'fsm_transitions_total',
    'Transition attempts by outcome',
    labelnames=['blueprint', 'transition', 'outcome']
)

GUARD_REJECTIONS = Counter(
    'fsm_guard_rejections_total',
    'Transitions vetoed by a guard',
    labelnames=['blueprint', 'transition']
)

TRANSITION_LATENCY = Histogram(
    'fsm_transition_latency_seconds',
    'Latency of guard evaluation and state update',
    labelnames=['blueprint'],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1)
)


def record_transition(blueprint: str,
                      transition: str,
                      outcome: str,
                      latency: Optional[float] = None):
    """Record a single transition attempt"""
    TRANSITIONS.labels(
        blueprint=blueprint,
        transition=transition,
        outcome=outcome
    ).inc()

    if outcome == 'guard_rejected':
        GUARD_REJECTIONS.labels(blueprint=blueprint, transition=transition).inc()

    if latency is not None:
        TRANSITION_LATENCY.labels(blueprint=blueprint).observe(latency)
