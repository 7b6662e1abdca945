from unittest.mock import AsyncMock, MagicMock

import pytest

from traitmatch.core.config import settings
from traitmatch.libs.matching import CatalogUnavailableError, JobStatus
from traitmatch.services.matching_service import (
    load_catalog,
    match_profile,
    match_profile_with_diagnostics,
)
from traitmatch.tests.factories import make_company, make_job


@pytest.fixture
def job_repository():
    repository = AsyncMock()
    repository.get_all.return_value = [
        make_job("j1", "c1"),
        make_job("j2", "c2", {"focus": 6}),
        make_job("j3", "missing", {"focus": 8}),
    ]
    repository.get_by_company_id.return_value = [make_job("j2", "c2", {"focus": 6})]
    return repository


@pytest.fixture
def company_repository():
    repository = AsyncMock()
    repository.get_by_ids.return_value = [
        make_company("c1", {"focus": 8}),
        make_company("c2", {"focus": 8}),
    ]
    return repository


@pytest.mark.asyncio
async def test_load_catalog_batches_company_lookup(job_repository, company_repository):
    jobs, companies_by_id = await load_catalog(job_repository, company_repository)

    assert len(jobs) == 3
    assert set(companies_by_id) == {"c1", "c2"}
    company_repository.get_by_ids.assert_awaited_once_with({"c1", "c2", "missing"})
    job_repository.get_by_company_id.assert_not_called()


@pytest.mark.asyncio
async def test_load_catalog_filters_by_company(job_repository, company_repository):
    await load_catalog(job_repository, company_repository, company_id="c2")

    job_repository.get_by_company_id.assert_awaited_once_with("c2")
    job_repository.get_all.assert_not_called()


@pytest.mark.asyncio
async def test_repository_failure_becomes_catalog_error(job_repository, company_repository):
    job_repository.get_all.side_effect = RuntimeError("connection reset")

    with pytest.raises(CatalogUnavailableError):
        await match_profile(
            {"focus": 8},
            job_repository=job_repository,
            company_repository=company_repository,
        )


@pytest.mark.asyncio
async def test_match_profile_ranks_matches(job_repository, company_repository):
    matches = await match_profile(
        {"focus": 8},
        job_repository=job_repository,
        company_repository=company_repository,
    )

    assert [m.job.id for m in matches] == ["j1", "j2"]
    assert matches[0].score == 1.0
    assert matches[1].score == pytest.approx(1 / 3)


@pytest.mark.asyncio
async def test_match_profile_with_diagnostics(job_repository, company_repository):
    report = await match_profile_with_diagnostics(
        {"focus": 8},
        job_repository=job_repository,
        company_repository=company_repository,
    )

    statuses = {d.job_id: d.status for d in report.diagnostics.jobs}
    assert statuses["j3"] is JobStatus.NO_COMPANY_FOUND
    assert report.diagnostics.total_jobs_analyzed == 3
    assert [m.job.id for m in report.matches] == ["j1", "j2"]


@pytest.mark.asyncio
async def test_match_metrics_are_reported(monkeypatch, job_repository, company_repository):
    monkeypatch.setattr(settings, "metrics_enabled", True)
    monkeypatch.setattr("traitmatch.metrics.core._get_statsd_client", lambda: MagicMock())
    report_count = MagicMock()
    report_scores = MagicMock()
    monkeypatch.setattr("traitmatch.services.matching_service.report_match_count", report_count)
    monkeypatch.setattr(
        "traitmatch.services.matching_service.report_match_score_distribution", report_scores
    )

    await match_profile(
        {"focus": 8},
        job_repository=job_repository,
        company_repository=company_repository,
    )

    report_count.assert_called_once_with(2, {"algorithm": "trait_distance"})
    scores, tags = report_scores.call_args.args
    assert scores == pytest.approx([1.0, 1 / 3])
    assert tags == {"algorithm": "trait_distance"}
