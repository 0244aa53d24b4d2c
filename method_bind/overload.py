"""
Overload grouping module

Buckets MethodSpecs by generated name, then by arity.
"""

from .ir import ArityGroup, MethodSpec


def group(specs: list[MethodSpec]) -> dict[str, list[ArityGroup]]:
    """Group specs into one ArityGroup per (generated_name, arity)

    Names and arities keep their first-seen order. The first spec of a
    bucket is its representative; every spec contributes its param_types
    as a coercion candidate. Buckets with more than one spec cannot be
    hinted safely.
    """
    buckets: dict[str, dict[int, list[MethodSpec]]] = {}
    for spec in specs:
        by_arity = buckets.setdefault(spec.generated_name, {})
        by_arity.setdefault(spec.arity, []).append(spec)

    grouped = {}
    for name, by_arity in buckets.items():
        grouped[name] = [
            ArityGroup(
                generated_name=name,
                arity=arity,
                spec=bucket[0],
                signatures=tuple(s.param_types for s in bucket),
                hinting_disabled=len(bucket) > 1,
            )
            for arity, bucket in by_arity.items()
        ]
    return grouped


def name_map(grouped: dict[str, list[ArityGroup]]) -> dict[str, str]:
    """Map generated names to the raw name of their first representative"""
    return {name: groups[0].spec.raw_name for name, groups in grouped.items()}


def collisions(specs: list[MethodSpec]) -> dict[str, list[str]]:
    """Generated names that more than one raw name collapses to"""
    raw_names: dict[str, list[str]] = {}
    for spec in specs:
        names = raw_names.setdefault(spec.generated_name, [])
        if spec.raw_name not in names:
            names.append(spec.raw_name)
    return {name: names for name, names in raw_names.items() if len(names) > 1}
