"""
Service exposing the official trait library.

The library is static: the set of traits profiles, companies and jobs are
expected to be expressed in, along with the allowed value range for each.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from traitmatch.schemas.trait import TraitCategory, TraitLibrarySchema, TraitSchema

LIBRARY_VERSION = "1.0.0"


def _trait(id: str, name: str, description: str, category: TraitCategory, examples: List[str]) -> TraitSchema:
    return TraitSchema(id=id, name=name, description=description, category=category, examples=examples)


OFFICIAL_TRAITS: List[TraitSchema] = [
    _trait(
        "attention_to_detail",
        "Attention to Detail",
        "Noticing fine details and accuracy in work",
        TraitCategory.COGNITIVE,
        [
            "Thorough code reviews and testing",
            "Precise documentation and specifications",
            "Quality assurance and error detection",
        ],
    ),
    _trait(
        "autonomy",
        "Autonomy",
        "Working independently and making decisions",
        TraitCategory.WORK_STYLE,
        [
            "Self-directed project management",
            "Independent problem-solving",
            "Minimal supervision required",
        ],
    ),
    _trait(
        "collaboration",
        "Collaboration",
        "Working effectively with others in teams",
        TraitCategory.SOCIAL,
        [
            "Team-based projects and brainstorming",
            "Cross-functional communication",
            "Pair programming and code reviews",
        ],
    ),
    _trait(
        "deep_focus",
        "Deep Focus",
        "Maintaining concentration for extended periods",
        TraitCategory.COGNITIVE,
        [
            "Complex algorithm development",
            "Long coding sessions",
            "Research and analysis tasks",
        ],
    ),
    _trait(
        "empathy",
        "Empathy",
        "Understanding and relating to others' emotions",
        TraitCategory.EMOTIONAL,
        [
            "User experience design",
            "Customer support and relations",
            "Team leadership and mentoring",
        ],
    ),
    _trait(
        "pattern_recognition",
        "Pattern Recognition",
        "Identifying patterns and connections",
        TraitCategory.COGNITIVE,
        [
            "Data analysis and insights",
            "System architecture design",
            "Debugging and troubleshooting",
        ],
    ),
    _trait(
        "problem_solving",
        "Problem Solving",
        "Finding solutions to complex challenges",
        TraitCategory.COGNITIVE,
        [
            "Technical troubleshooting",
            "Algorithm optimization",
            "Creative solution development",
        ],
    ),
    _trait(
        "quiet_office",
        "Quiet Office",
        "Low noise, minimal distractions workspace",
        TraitCategory.ENVIRONMENTAL,
        [
            "Noise-cancelling headphones provided",
            "Private or semi-private workspace",
            "Minimal interruptions policy",
        ],
    ),
    _trait(
        "systematic_thinking",
        "Systematic Thinking",
        "Approaching problems methodically",
        TraitCategory.COGNITIVE,
        [
            "Structured development processes",
            "Step-by-step problem breakdown",
            "Methodical testing approaches",
        ],
    ),
    _trait(
        "visual_thinking",
        "Visual Thinking",
        "Processing and understanding visual information",
        TraitCategory.COGNITIVE,
        [
            "UI/UX design and prototyping",
            "Data visualization",
            "Diagram-based communication",
        ],
    ),
    _trait(
        "work_life_balance",
        "Work Life Balance",
        "Maintaining healthy balance between work and personal life",
        TraitCategory.WORK_STYLE,
        [
            "Flexible working hours",
            "Respect for personal time",
            "Mental health support",
        ],
    ),
    _trait(
        "working_from_home",
        "Working from Home",
        "Remote work capabilities and preferences",
        TraitCategory.ENVIRONMENTAL,
        [
            "Full remote work options",
            "Flexible location policies",
            "Digital collaboration tools",
        ],
    ),
]


class TraitLibraryService:
    """Read-only access to the official traits."""

    def __init__(self, traits: Optional[List[TraitSchema]] = None):
        self._traits = list(traits if traits is not None else OFFICIAL_TRAITS)
        self._by_id = {trait.id: trait for trait in self._traits}

    def get_trait_library(self) -> TraitLibrarySchema:
        return TraitLibrarySchema(
            traits=self._traits,
            version=LIBRARY_VERSION,
            last_updated=datetime.now(timezone.utc),
        )

    def get_trait_by_id(self, trait_id: str) -> Optional[TraitSchema]:
        return self._by_id.get(trait_id)

    def get_traits_by_category(self, category: TraitCategory) -> List[TraitSchema]:
        return [trait for trait in self._traits if trait.category == category]

    def get_all_trait_ids(self) -> List[str]:
        return [trait.id for trait in self._traits]

    def is_valid_trait_id(self, trait_id: str) -> bool:
        return trait_id in self._by_id

    def validate_trait_map(self, traits: Mapping[str, int]) -> Dict[str, str]:
        """
        Check a trait map against the library.

        Args:
            traits: Trait id to value

        Returns:
            Trait id to error message, empty when every entry is valid
        """
        errors: Dict[str, str] = {}
        for trait_id, value in traits.items():
            trait = self._by_id.get(trait_id)
            if trait is None:
                errors[trait_id] = "Unknown trait ID"
            elif value < trait.min_value or value > trait.max_value:
                errors[trait_id] = f"Value must be between {trait.min_value} and {trait.max_value}"
        return errors


# Create a singleton instance
trait_library_service = TraitLibraryService()
