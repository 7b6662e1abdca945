"""
Tests for the MongoDB repositories, run against mocked motor collections.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from traitmatch.repositories.companies import CompanyRepository
from traitmatch.repositories.jobs import JobRepository
from traitmatch.repositories.messages import MessageRepository
from traitmatch.schemas.message import MessageSchema, MessageStatus
from traitmatch.schemas.user import ProfileSchema
from traitmatch.tests.factories import make_job


def fake_collection(documents=None):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents or [])

    collection = MagicMock()
    collection.find.return_value = cursor
    collection.find_one = AsyncMock(return_value=None)
    collection.replace_one = AsyncMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


@pytest.mark.asyncio
async def test_save_upserts_camel_case_document():
    collection = fake_collection()
    repository = JobRepository(collection)
    job = make_job("j1", "c1", {"focus": 8})

    await repository.save(job)

    query, document = collection.replace_one.await_args.args
    assert query == {"_id": "j1"}
    assert document["_id"] == "j1"
    assert document["companyId"] == "c1"
    assert document["traits"] == {"focus": 8}
    assert collection.replace_one.await_args.kwargs == {"upsert": True}


@pytest.mark.asyncio
async def test_get_by_company_id_skips_malformed_documents():
    collection = fake_collection([
        {"_id": "j1", "id": "j1", "companyId": "c1", "title": "Engineer", "traits": {"focus": 8}},
        {"_id": "j2", "companyId": "c1"},
    ])
    repository = JobRepository(collection)

    jobs = await repository.get_by_company_id("c1")

    collection.find.assert_called_once_with({"companyId": "c1"})
    assert [job.id for job in jobs] == ["j1"]
    assert jobs[0].company_id == "c1"


@pytest.mark.asyncio
async def test_get_by_id_missing_returns_none():
    repository = JobRepository(fake_collection())

    assert await repository.get_by_id("nope") is None


@pytest.mark.asyncio
async def test_delete_reports_whether_anything_was_removed():
    collection = fake_collection()
    collection.delete_one.return_value = MagicMock(deleted_count=0)

    assert await JobRepository(collection).delete("j1") is False


@pytest.mark.asyncio
async def test_company_batch_lookup():
    collection = fake_collection([{"_id": "c1", "id": "c1", "name": "Logic Inc.", "traits": {}}])
    repository = CompanyRepository(collection)

    companies = await repository.get_by_ids(["c2", "c1", "c1"])

    collection.find.assert_called_once_with({"_id": {"$in": ["c1", "c2"]}})
    assert [c.id for c in companies] == ["c1"]


@pytest.mark.asyncio
async def test_company_batch_lookup_with_no_ids_skips_query():
    collection = fake_collection()

    assert await CompanyRepository(collection).get_by_ids(set()) == []
    collection.find.assert_not_called()


@pytest.mark.asyncio
async def test_new_message_starts_its_own_thread():
    collection = fake_collection()
    repository = MessageRepository(collection)

    saved = await repository.save(MessageSchema(id="m1", from_id="u1", to_id="c1", content="Hi"))

    assert saved.thread_id == "m1"
    document = collection.replace_one.await_args.args[1]
    assert document["threadId"] == "m1"
    assert document["status"] == "SENT"


@pytest.mark.asyncio
async def test_anonymous_message_drops_sender_details():
    collection = fake_collection()
    repository = MessageRepository(collection)
    message = MessageSchema(
        from_id="u1",
        to_id="c1",
        content="Hi",
        is_anonymous=True,
        sender_name="Sam",
        sender_profile=ProfileSchema(traits={"focus": 8}),
        thread_id="t1",
    )

    saved = await repository.save(message)

    assert saved.sender_name is None
    assert saved.sender_profile is None
    assert saved.thread_id == "t1"


@pytest.mark.asyncio
async def test_messages_for_company_sorted_by_creation():
    collection = fake_collection()
    repository = MessageRepository(collection)

    await repository.get_for_company("c1")

    collection.find.assert_called_once_with({"$or": [{"toId": "c1"}, {"fromId": "c1"}]})
    collection.find.return_value.sort.assert_called_once_with("createdAt", 1)


@pytest.mark.asyncio
async def test_update_status():
    collection = fake_collection()
    repository = MessageRepository(collection)

    assert await repository.update_status("m1", MessageStatus.READ)
    collection.update_one.assert_awaited_once_with({"_id": "m1"}, {"$set": {"status": "READ"}})
