"""
Seed the database with companies and a varied job catalog.

Every job template is posted once per company in two trait variations, the
first five templates also get a seniority ladder at one company, and three
reference jobs are added whose scores against REFERENCE_PROFILE are known
(1.0 for the exact match, about 0.22 for the +1 and -1 variants).

Usage:
    python -m traitmatch.scripts.seed_jobs [--seed 42] [--dry-run]
"""

import argparse
import asyncio
import random
import sys
from typing import Dict, List, Optional

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.log.logging import logger
from traitmatch.repositories.companies import CompanyRepository
from traitmatch.repositories.jobs import JobRepository
from traitmatch.schemas.company import CompanySchema
from traitmatch.schemas.job import JobSchema
from traitmatch.services.trait_library_service import trait_library_service

COMPANIES: List[CompanySchema] = [
    CompanySchema(
        id="550e8400-e29b-41d4-a716-446655440001",
        name="Creative Co.",
        email="hiring@creativeco.example",
        traits={"work_life_balance": 9, "collaboration": 8, "working_from_home": 10},
    ),
    CompanySchema(
        id="550e8400-e29b-41d4-a716-446655440002",
        name="Logic Inc.",
        email="jobs@logicinc.example",
        traits={"deep_focus": 9, "autonomy": 7, "quiet_office": 9, "working_from_home": 8},
    ),
    CompanySchema(
        id="550e8400-e29b-41d4-a716-446655440003",
        name="DataDriven Corp",
        email="talent@datadriven.example",
        traits={"pattern_recognition": 9, "deep_focus": 8, "quiet_office": 7},
    ),
]

JOB_TEMPLATES: List[Dict] = [
    {
        "title": "UI/UX Designer",
        "description": "Design intuitive user interfaces with attention to accessibility and user experience.",
        "traits": {"visual_thinking": 9, "empathy": 8, "attention_to_detail": 7, "autonomy": 9},
    },
    {
        "title": "Graphic Designer",
        "description": "Create visual content for marketing materials and brand identity.",
        "traits": {"visual_thinking": 10, "autonomy": 9, "attention_to_detail": 8, "working_from_home": 8},
    },
    {
        "title": "Creative Director",
        "description": "Lead creative projects and mentor design teams.",
        "traits": {"visual_thinking": 8, "collaboration": 9, "empathy": 8, "autonomy": 9},
    },
    {
        "title": "Software Engineer",
        "description": "Develop robust applications using modern programming languages and frameworks.",
        "traits": {"problem_solving": 9, "systematic_thinking": 8, "deep_focus": 8, "autonomy": 7},
    },
    {
        "title": "Senior Backend Developer",
        "description": "Architect and implement scalable server-side systems and APIs.",
        "traits": {"systematic_thinking": 9, "problem_solving": 9, "deep_focus": 9, "quiet_office": 8},
    },
    {
        "title": "Frontend Developer",
        "description": "Build responsive web applications with focus on user experience.",
        "traits": {"visual_thinking": 7, "attention_to_detail": 9, "problem_solving": 8, "working_from_home": 8},
    },
    {
        "title": "DevOps Engineer",
        "description": "Automate deployment pipelines and manage cloud infrastructure.",
        "traits": {"systematic_thinking": 10, "problem_solving": 8, "autonomy": 8, "work_life_balance": 7},
    },
    {
        "title": "Mobile App Developer",
        "description": "Create native mobile applications for iOS and Android platforms.",
        "traits": {"problem_solving": 8, "attention_to_detail": 9, "visual_thinking": 6, "autonomy": 8},
    },
    {
        "title": "Data Scientist",
        "description": "Extract insights from complex datasets using statistical analysis and machine learning.",
        "traits": {"pattern_recognition": 10, "systematic_thinking": 9, "deep_focus": 9, "quiet_office": 8},
    },
    {
        "title": "Data Analyst",
        "description": "Analyze business data to support decision-making and identify trends.",
        "traits": {"pattern_recognition": 9, "attention_to_detail": 9, "systematic_thinking": 8, "quiet_office": 7},
    },
    {
        "title": "Business Intelligence Analyst",
        "description": "Create dashboards and reports to visualize business performance metrics.",
        "traits": {"pattern_recognition": 8, "visual_thinking": 7, "systematic_thinking": 8, "attention_to_detail": 8},
    },
    {
        "title": "Machine Learning Engineer",
        "description": "Build and deploy ML models to solve business problems.",
        "traits": {"systematic_thinking": 10, "problem_solving": 9, "pattern_recognition": 9, "deep_focus": 9},
    },
    {
        "title": "Quality Assurance Tester",
        "description": "Test software applications to ensure quality and reliability.",
        "traits": {"attention_to_detail": 10, "systematic_thinking": 8, "pattern_recognition": 7, "quiet_office": 8},
    },
    {
        "title": "Technical Writer",
        "description": "Create clear documentation for technical products and APIs.",
        "traits": {"attention_to_detail": 9, "systematic_thinking": 9, "working_from_home": 8},
    },
    {
        "title": "Customer Support Specialist",
        "description": "Provide technical support and help customers solve problems.",
        "traits": {"empathy": 9, "problem_solving": 7, "systematic_thinking": 8, "collaboration": 6},
    },
    {
        "title": "Cybersecurity Analyst",
        "description": "Monitor and protect systems from security threats.",
        "traits": {"pattern_recognition": 9, "attention_to_detail": 10, "systematic_thinking": 8, "deep_focus": 8},
    },
    {
        "title": "Database Administrator",
        "description": "Maintain and optimize database systems for performance and reliability.",
        "traits": {"systematic_thinking": 9, "attention_to_detail": 9, "problem_solving": 7, "quiet_office": 8},
    },
    {
        "title": "Research Scientist",
        "description": "Conduct research to advance knowledge in computer science and AI.",
        "traits": {"deep_focus": 10, "systematic_thinking": 9, "pattern_recognition": 8, "autonomy": 9},
    },
]

SENIORITY_LEVELS = [("Junior", -1), ("", 0), ("Senior", 1), ("Lead", 2)]

REFERENCE_PROFILE: Dict[str, int] = {
    "work_life_balance": 5,
    "autonomy": 7,
    "empathy": 9,
    "visual_thinking": 5,
    "systematic_thinking": 5,
    "collaboration": 6,
    "pattern_recognition": 4,
    "problem_solving": 7,
    "quiet_office": 1,
    "working_from_home": 9,
    "attention_to_detail": 8,
    "deep_focus": 3,
}


def _clamp(value: int) -> int:
    return max(1, min(10, value))


def trait_variations(base_traits: Dict[str, int], rng: random.Random, count: int = 2) -> List[Dict[str, int]]:
    """
    Derive trait maps close to a template.

    Each variation gains one to three extra traits valued 6-10 and nudges
    every value by -1, 0 or +1, staying within 1-10.
    """
    trait_pool = trait_library_service.get_all_trait_ids()
    variations = []
    for _ in range(count):
        traits = dict(base_traits)
        for _ in range(rng.randint(1, 3)):
            trait = rng.choice(trait_pool)
            traits.setdefault(trait, rng.randint(6, 10))
        variations.append({trait: _clamp(value + rng.randint(-1, 1)) for trait, value in traits.items()})
    return variations


def seniority_ladder(template: Dict, company: CompanySchema) -> List[JobSchema]:
    jobs = []
    for prefix, modifier in SENIORITY_LEVELS:
        jobs.append(
            JobSchema(
                company_id=company.id,
                title=f"{prefix} {template['title']}" if prefix else template["title"],
                description=template["description"],
                traits={trait: _clamp(value + modifier) for trait, value in template["traits"].items()},
            )
        )
    return jobs


def reference_jobs() -> List[JobSchema]:
    """Jobs with a known score against REFERENCE_PROFILE."""
    return [
        JobSchema(
            company_id=COMPANIES[0].id,
            title="Perfect Match Test Job",
            description="Exactly matches the reference trait profile",
            traits=dict(REFERENCE_PROFILE),
        ),
        JobSchema(
            company_id=COMPANIES[1].id,
            title="Close Match +1 Test Job",
            description="One point higher on each trait of the reference profile",
            traits={trait: value + 1 for trait, value in REFERENCE_PROFILE.items()},
        ),
        JobSchema(
            company_id=COMPANIES[2].id,
            title="Close Match -1 Test Job",
            description="One point lower on each trait of the reference profile",
            traits={trait: value - 1 for trait, value in REFERENCE_PROFILE.items()},
        ),
    ]


def generate_jobs(rng: Optional[random.Random] = None) -> List[JobSchema]:
    """
    Build the complete seed catalog.

    Args:
        rng: Source of randomness, seeded for reproducible catalogs

    Returns:
        Jobs referencing the companies in COMPANIES only
    """
    rng = rng or random.Random()
    jobs: List[JobSchema] = []

    for template in JOB_TEMPLATES:
        for company in COMPANIES:
            for index, traits in enumerate(trait_variations(template["traits"], rng)):
                jobs.append(
                    JobSchema(
                        company_id=company.id,
                        title=template["title"] if index == 0 else f"{template['title']} ({company.name})",
                        description=template["description"],
                        traits=traits,
                    )
                )

    for template in JOB_TEMPLATES[:5]:
        jobs.extend(seniority_ladder(template, rng.choice(COMPANIES)))

    jobs.extend(reference_jobs())
    return jobs


async def seed(job_repository: JobRepository, company_repository: CompanyRepository, jobs: List[JobSchema]) -> Dict[str, int]:
    """Upsert the companies, then every job. Failed jobs are logged and counted."""
    for company in COMPANIES:
        await company_repository.save(company)

    successful = 0
    failed = 0
    for index, job in enumerate(jobs, start=1):
        try:
            await job_repository.save(job)
            successful += 1
        except Exception as e:
            failed += 1
            logger.error(
                "{index}/{total}: failed to create {title}",
                index=index,
                total=len(jobs),
                title=job.title,
                error=str(e),
            )

    return {"successful": successful, "failed": failed, "total": successful + failed}


async def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed companies and jobs.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible job traits")
    parser.add_argument("--dry-run", action="store_true", help="Generate and log the catalog without writing it")
    args = parser.parse_args(argv)

    jobs = generate_jobs(random.Random(args.seed))
    logger.info("Generated {count} jobs for seeding", count=len(jobs))
    for job in jobs[:3]:
        logger.info("Sample job {title}", title=job.title, company_id=job.company_id, traits=job.traits)

    if args.dry_run:
        return 0

    await mongodb.initialize()
    try:
        summary = await seed(
            JobRepository(mongodb.get_collection(settings.jobs_collection)),
            CompanyRepository(mongodb.get_collection(settings.companies_collection)),
            jobs,
        )
    finally:
        await mongodb.close()

    logger.info("Seeding complete", **summary)
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
