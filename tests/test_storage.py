"""
Unit tests for local storage, user storage and the record store.
"""

from datetime import datetime, timedelta, timezone

import pytest

from recoverytrack.models import AIInsight, Conversation, Message, MessageAttachment, MobilityPlan, NutritionRestPlan
from recoverytrack.storage.record_store import is_valid_record_id
from recoverytrack.storage.user_storage import UserStorage

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestLocalStorage:

    @pytest.mark.asyncio
    async def test_save_and_load(self, storage):
        assert not await storage.exists("a/b.json")
        assert await storage.save("a/b.json", '{"x": 1}')
        assert await storage.exists("a/b.json")
        assert await storage.load("a/b.json") == b'{"x": 1}'
        assert await storage.load("a/missing.json") is None

    @pytest.mark.asyncio
    async def test_binary_content(self, storage):
        assert await storage.save("files/img.png", b"\x89PNG")
        assert await storage.load("files/img.png") == b"\x89PNG"
        assert await storage.list("files") == ["files/img.png"]

    @pytest.mark.asyncio
    async def test_list_recursive(self, storage):
        await storage.save("logs/p1/one.json", "{}")
        await storage.save("logs/p2/two.json", "{}")
        assert await storage.list("logs", pattern="*.json") == []
        assert await storage.list("logs", pattern="*.json", recursive=True) == ["logs/p1/one.json", "logs/p2/two.json"]

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, storage):
        assert not await storage.save("../outside.txt", "nope")
        assert not await storage.exists("../../etc/passwd")
        assert await storage.load("../outside.txt") is None


class TestUserStorage:

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, storage):
        users = UserStorage(storage)
        created = await users.create_user(
            "u1", "Pat.Lee@Example.com", "hash", "player", "Pat Lee", 24, team_id=3
        )
        assert created["id"] == "u1"

        assert (await users.get_user("u1"))["full_name"] == "Pat Lee"
        assert (await users.get_user_by_email("pat.lee@example.com"))["id"] == "u1"
        assert await users.get_user_by_email("nobody@example.com") is None
        assert await users.get_user("missing") is None

    @pytest.mark.asyncio
    async def test_list_by_role(self, storage):
        users = UserStorage(storage)
        await users.create_user("u1", "a@example.com", "h", "player", "Zed", 20)
        await users.create_user("u2", "b@example.com", "h", "physician", "Dr. Brooks", 45)
        await users.create_user("u3", "c@example.com", "h", "physician", "Dr. Adams", 50)

        physicians = await users.list_users(role="physician")
        assert [user["full_name"] for user in physicians] == ["Dr. Adams", "Dr. Brooks"]
        assert len(await users.list_users()) == 3


class TestRecordStore:

    def test_record_ids(self):
        assert is_valid_record_id("3f2b8c1e-aaaa-4bbb-8ccc-123456789abc")
        assert not is_valid_record_id("*")
        assert not is_valid_record_id("../x")
        assert not is_valid_record_id("")

    @pytest.mark.asyncio
    async def test_logs_newest_first(self, record_store, make_log):
        older = make_log(NOW - timedelta(days=1))
        newer = make_log(NOW)
        assert await record_store.create_log(older)
        assert await record_store.create_log(newer)

        assert [log.id for log in await record_store.list_logs("player-1")] == [newer.id, older.id]
        assert await record_store.list_logs("someone-else") == []

    @pytest.mark.asyncio
    async def test_logs_are_not_overwritten(self, record_store, make_log):
        log = make_log(NOW)
        assert await record_store.create_log(log)
        assert not await record_store.create_log(log.model_copy(update={"health_score": 10}))
        assert (await record_store.get_log(log.id)).health_score == log.health_score

    @pytest.mark.asyncio
    async def test_get_log(self, record_store, make_log):
        log = make_log(NOW)
        await record_store.create_log(log)
        assert await record_store.get_log(log.id) == log
        assert await record_store.get_log("missing") is None
        assert await record_store.get_log("*") is None

    @pytest.mark.asyncio
    async def test_insight(self, record_store):
        insight = AIInsight(
            id="i1",
            log_id="l1",
            mobility_plan=MobilityPlan(),
            nutrition_rest_plan=NutritionRestPlan(hydration="2L", rest="Sleep"),
        )
        assert await record_store.create_insight(insight)
        assert await record_store.get_insight_for_log("l1") == insight
        assert await record_store.get_insight_for_log("l2") is None

    @pytest.mark.asyncio
    async def test_conversations(self, record_store):
        first = Conversation(id="c1", player_id="p1", physician_id="d1", last_message_at=NOW - timedelta(hours=2))
        second = Conversation(id="c2", player_id="p1", physician_id="d2", last_message_at=NOW - timedelta(hours=1))
        await record_store.save_conversation(first)
        await record_store.save_conversation(second)

        assert [c.id for c in await record_store.list_conversations("p1")] == ["c2", "c1"]
        assert [c.id for c in await record_store.list_conversations("d1")] == ["c1"]
        assert (await record_store.find_conversation("p1", "d2")).id == "c2"
        assert await record_store.find_conversation("p2", "d2") is None

        await record_store.touch_conversation(first, NOW)
        assert [c.id for c in await record_store.list_conversations("p1")] == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_messages_and_read_state(self, record_store):
        await record_store.save_message(Message(
            id="m1", conversation_id="c1", sender_id="p1", content="Knee still sore", sent_at=NOW
        ))
        await record_store.save_message(Message(
            id="m2", conversation_id="c1", sender_id="d1", content="Ice it tonight", sent_at=NOW + timedelta(minutes=5)
        ))

        assert await record_store.count_unread("c1", "d1") == 1
        assert await record_store.mark_read("c1", "d1") == 1
        assert await record_store.count_unread("c1", "d1") == 0
        assert await record_store.count_unread("c1", "p1") == 1

        messages = await record_store.list_messages("c1")
        assert [m.id for m in messages] == ["m1", "m2"]
        assert messages[0].read_by_recipient is True

    @pytest.mark.asyncio
    async def test_attachments(self, record_store):
        await record_store.save_message(Message(id="m1", conversation_id="c1", sender_id="p1", content="X-ray"))
        path = await record_store.save_attachment_file("p1", "123.png", b"\x89PNG")
        assert path == "attachment_files/p1/123.png"

        await record_store.save_attachment(MessageAttachment(
            id="a1", message_id="m1", file_path=path, file_type="image/png"
        ))
        message = (await record_store.list_messages("c1"))[0]
        assert [a.file_path for a in message.attachments] == [path]
        assert (await record_store.get_message("c1", "m1")).attachments == []

    @pytest.mark.asyncio
    async def test_attachment_files_are_not_overwritten(self, record_store, storage):
        path = await record_store.save_attachment_file("p1", "123.png", b"FIRST")
        assert path == "attachment_files/p1/123.png"

        assert await record_store.save_attachment_file("p1", "123.png", b"SECOND") is None
        assert await storage.load(path) == b"FIRST"
