"""Trait set helpers shared by the scoring paths."""

from typing import Dict, List, Mapping

TraitSet = Mapping[str, int]


def effective_traits(company_traits: TraitSet, job_traits: TraitSet) -> Dict[str, int]:
    """Company traits overlaid by job traits; the job wins on a shared key."""
    merged = dict(company_traits)
    merged.update(job_traits)
    return merged


def common_traits(profile_traits: TraitSet, job_traits: TraitSet) -> List[str]:
    return sorted(set(profile_traits) & set(job_traits))


def sum_of_squares(profile_traits: TraitSet, job_traits: TraitSet, keys: List[str]) -> float:
    """Squared differences summed over ``keys`` only."""
    return float(sum((profile_traits[key] - job_traits[key]) ** 2 for key in keys))
