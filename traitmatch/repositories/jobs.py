from typing import List

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.repositories.base import MongoRepository
from traitmatch.schemas.job import JobSchema


class JobRepository(MongoRepository[JobSchema]):
    """Data access for job postings."""

    schema = JobSchema

    async def get_by_company_id(self, company_id: str) -> List[JobSchema]:
        return await self._find({"companyId": company_id})


def get_job_repository() -> JobRepository:
    return JobRepository(mongodb.get_collection(settings.jobs_collection))
