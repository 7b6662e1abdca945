from typing import Iterable, List, Optional

from traitmatch.core.config import settings
from traitmatch.core.mongodb import mongodb
from traitmatch.repositories.base import MongoRepository
from traitmatch.schemas.company import CompanySchema


class CompanyRepository(MongoRepository[CompanySchema]):
    """Data access for companies."""

    schema = CompanySchema

    async def get_by_ids(self, company_ids: Iterable[str]) -> List[CompanySchema]:
        """
        Batch lookup by id.

        Args:
            company_ids: Ids to resolve; unknown ids are simply absent from the result

        Returns:
            The companies that exist
        """
        ids = sorted(set(company_ids))
        if not ids:
            return []
        return await self._find({"_id": {"$in": ids}})

    async def get_by_email(self, email: str) -> Optional[CompanySchema]:
        document = await self.collection.find_one({"email": email})
        return self._from_document(document) if document else None


def get_company_repository() -> CompanyRepository:
    return CompanyRepository(mongodb.get_collection(settings.companies_collection))
