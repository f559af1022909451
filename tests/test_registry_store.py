"""Tests for RegistryStore mutations and views."""

import asyncio
from decimal import Decimal

import pytest

from registry_sync.exceptions import CsvFormatError, EntityNotFoundError, ReferentialIntegrityError
from registry_sync.ingest.normalizer import IngestBatch, ingest_text
from registry_sync.models import Message, Notice, Owner, PropertyFile
from registry_sync.seed import seed_files, seed_owners
from registry_sync.store import RegistryStore


def _run(store: RegistryStore, coro) -> object:
    async def wrapper() -> object:
        result = await coro
        await store.flush()
        return result

    return asyncio.run(wrapper())


class TestViews:
    """Tests for read-only views."""

    def test_collections_are_tuples(self, store: RegistryStore, sample_owner: Owner) -> None:
        store.restore("owners", [sample_owner])

        assert store.owners == (sample_owner,)
        assert isinstance(store.files, tuple)

    def test_owner_files_match_normalized_identity(
        self, store: RegistryStore, sample_owner: Owner, sample_file: PropertyFile
    ) -> None:
        other = PropertyFile(file_no="F-200", owner_name="Other", owner_cnic="999")
        store.restore("files", [sample_file, other])

        assert store.owner_files(sample_owner) == [sample_file]

    def test_portfolio_summary(self, store: RegistryStore, sample_owner: Owner, sample_file: PropertyFile) -> None:
        store.restore("files", [sample_file])

        summary = store.portfolio_summary(sample_owner)

        assert summary == {
            "total_received": Decimal("400000"),
            "total_outstanding": Decimal("600000"),
            "collection_index": 40,
        }

    def test_collection_index_rounds_half_up(self, store: RegistryStore, sample_owner: Owner) -> None:
        prop = PropertyFile(
            file_no="F-300",
            owner_name=sample_owner.name,
            owner_cnic=sample_owner.cnic,
            payment_received=Decimal("1"),
            balance=Decimal("7"),
        )
        store.restore("files", [prop])

        assert store.portfolio_summary(sample_owner)["collection_index"] == 13

    def test_portfolio_summary_without_files(self, store: RegistryStore, sample_owner: Owner) -> None:
        assert store.portfolio_summary(sample_owner)["collection_index"] == 0

    def test_registry_stats(self, store: RegistryStore) -> None:
        store.restore("files", seed_files())

        stats = store.registry_stats()

        assert stats == {"collection": Decimal("1000000"), "outstanding": Decimal("1500000"), "count": 1}

    def test_visible_messages(self, store: RegistryStore, sample_owner: Owner, sample_admin: Owner) -> None:
        messages = [
            Message(id="1", sender_id="admin-test", receiver_id=sample_owner.id, content="a", timestamp="t"),
            Message(id="2", sender_id="admin-test", receiver_id="ALL", content="b", timestamp="t"),
            Message(id="3", sender_id=sample_owner.id, receiver_id="admin-test", content="c", timestamp="t"),
            Message(id="4", sender_id="admin-test", receiver_id="someone-else", content="d", timestamp="t"),
            Message(id="5", sender_id="x", receiver_id=sample_owner.id, content="e", timestamp="t", is_read=True),
        ]
        store.restore("messages", messages)

        assert [m.id for m in store.visible_messages(sample_owner)] == ["1", "2", "3", "5"]
        assert len(store.visible_messages(sample_admin)) == 5
        assert store.unread_count(sample_owner) == 1


class TestMutations:
    """Each mutation updates memory, then persists, then mirrors."""

    def test_replace_owners_persists_and_mirrors(self, store, mirror, sample_owner: Owner) -> None:
        _run(store, store.replace_owners([sample_owner]))

        assert store.owners == (sample_owner,)
        persisted = asyncio.run(store.local.get("owners"))
        assert persisted[0]["cnic"] == "11111-2222222-3"
        assert mirror.upserts == [("owners", persisted)]

    def test_notices_and_messages_are_not_mirrored(self, store, mirror) -> None:
        notice = Notice(id="n", title="t", content="c", date="d")
        _run(store, store.replace_notices([notice]))
        _run(store, store.replace_messages([]))

        assert asyncio.run(store.local.get("notices"))[0]["id"] == "n"
        assert asyncio.run(store.local.get("messages")) == []
        assert mirror.upserts == []

    def test_disabled_mirror_is_skipped(self, store, mirror, sample_owner: Owner) -> None:
        mirror.enabled = False

        _run(store, store.register_owner(sample_owner))

        assert mirror.upserts == []
        assert len(asyncio.run(store.local.get("owners"))) == 1

    def test_register_owner_appends(self, store, sample_owner: Owner) -> None:
        store.restore("owners", seed_owners())

        _run(store, store.register_owner(sample_owner))

        assert store.owners[-1] is sample_owner
        assert len(store.owners) == 3

    def test_update_owner_refreshes_session(self, store, sample_owner: Owner) -> None:
        store.restore("owners", [sample_owner])
        store.login(sample_owner.id)
        edited = Owner(**{**sample_owner.__dict__, "phone": "0333-1111111"})

        _run(store, store.update_owner(edited))

        assert store.owners[0].phone == "0333-1111111"
        assert store.current_owner is edited

    def test_update_unknown_owner(self, store, sample_owner: Owner) -> None:
        with pytest.raises(EntityNotFoundError):
            asyncio.run(store.update_owner(sample_owner))

    def test_send_message_prepends(self, store) -> None:
        first = Message(id="1", sender_id="a", receiver_id="b", content="x", timestamp="t")
        second = Message(id="2", sender_id="b", receiver_id="a", content="y", timestamp="t")

        _run(store, store.send_message(first))
        _run(store, store.send_message(second))

        assert [m.id for m in store.messages] == ["2", "1"]
        assert [m["id"] for m in asyncio.run(store.local.get("messages"))] == ["2", "1"]

    def test_local_persistence_precedes_mirror(self, store, sample_owner: Owner) -> None:
        events: list[str] = []
        local_put = store.local.put

        async def tracking_put(name, value):
            events.append(f"local:{name}")
            return await local_put(name, value)

        async def tracking_upsert(name, records):
            events.append(f"remote:{name}")
            return True

        store.local.put = tracking_put
        store.mirror.upsert = tracking_upsert

        _run(store, store.import_batch(ingest_text("ocnic,itemcode\n1,F1")))

        assert events == ["local:owners", "local:files", "remote:owners", "remote:files"]

    def test_local_failure_does_not_block_memory(self, store, sample_owner: Owner) -> None:
        async def failing_put(name, value):
            return False

        store.local.put = failing_put

        _run(store, store.replace_owners([sample_owner]))

        assert store.owners == (sample_owner,)


class TestIngestion:
    """Tests for CSV ingestion through the store."""

    def test_scenario(self, store, scenario_csv: str) -> None:
        result = _run(store, store.ingest_csv(scenario_csv))

        (prop,) = store.files
        assert prop.file_no == "F1"
        assert prop.payment_received == 800
        assert prop.balance == 1700
        assert len(prop.transactions) == 2
        assert result["owners"] == 1
        assert result["registry_files"] == 1

    def test_incremental_is_default(self, store) -> None:
        store.restore("owners", seed_owners())
        store.restore("files", seed_files())

        _run(store, store.ingest_csv("ocnic,oname,itemcode\n35202-1234567-1,Renamed,F9\n"))

        assert [o.name for o in store.owners] == ["Registry Administrator", "Renamed"]
        assert [f.file_no for f in store.files] == ["DIN-R-0001", "F9"]

    def test_destructive_replaces_everything(self, store, mirror) -> None:
        store.restore("owners", seed_owners())
        store.restore("files", seed_files())

        _run(store, store.ingest_csv("ocnic,itemcode\n1,F9\n2,F10\n", destructive=True))

        assert [o.cnic for o in store.owners] == ["1", "2"]
        assert [f.file_no for f in store.files] == ["F9", "F10"]
        assert [name for name, _ in mirror.upserts] == ["owners", "files"]
        assert len(asyncio.run(store.local.get("files"))) == 2

    def test_format_error_commits_nothing(self, store, mirror) -> None:
        store.restore("files", seed_files())

        with pytest.raises(CsvFormatError):
            _run(store, store.ingest_csv("ocnic,itemcode\n"))

        assert [f.file_no for f in store.files] == ["DIN-R-0001"]
        assert asyncio.run(store.local.get("files")) is None
        assert mirror.upserts == []

    def test_reimport_replaces_file_ledger(self, store) -> None:
        _run(store, store.ingest_csv("ocnic,itemcode,paid\n1,F1,10\n1,F1,20\n"))
        _run(store, store.ingest_csv("ocnic,itemcode,paid\n1,F1,5\n"))

        (prop,) = store.files
        assert prop.payment_received == 5
        assert len(prop.transactions) == 1

    def test_import_batch_rejects_orphans(self, store) -> None:
        batch = IngestBatch(files={"F1": PropertyFile(file_no="F1", owner_name="X", owner_cnic="404")})

        with pytest.raises(ReferentialIntegrityError):
            asyncio.run(store.import_batch(batch))

        assert store.files == ()


class TestSessionAndReset:
    """Tests for login, logout and factory reset."""

    def test_login_logout(self, store, sample_owner: Owner) -> None:
        store.restore("owners", [sample_owner])

        assert store.login(sample_owner.id) is sample_owner
        assert store.session.load() == sample_owner.id

        store.logout()
        assert store.current_owner is None
        assert store.session.load() is None

    def test_login_unknown(self, store) -> None:
        with pytest.raises(EntityNotFoundError):
            store.login("nobody")

    def test_factory_reset(self, store, sample_owner: Owner) -> None:
        _run(store, store.replace_owners([sample_owner]))

        asyncio.run(store.factory_reset())

        assert [o.id for o in store.owners] == [o.id for o in seed_owners()]
        assert len(store.files) == 1
        assert asyncio.run(store.local.get("owners")) is None
        assert store.summary() == {"owners": 2, "files": 1, "notices": 1, "messages": 1}

    def test_factory_reset_drops_unseeded_identity(self, store, sample_owner: Owner) -> None:
        _run(store, store.replace_owners([sample_owner]))
        store.login(sample_owner.id)

        asyncio.run(store.factory_reset())

        assert store.current_owner is None

    def test_factory_reset_keeps_seeded_identity(self, store) -> None:
        admin_id = seed_owners()[0].id
        store.restore("owners", seed_owners())
        store.login(admin_id)

        asyncio.run(store.factory_reset())

        assert store.current_owner.id == admin_id
