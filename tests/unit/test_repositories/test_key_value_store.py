"""Unit tests for SqliteKeyValueStore."""


class TestSqliteKeyValueStore:
    """Test last-write-wins key/value semantics."""

    def test_get_missing(self, kv_store):
        assert kv_store.get("inspection_draft_x") is None

    def test_set_and_get(self, kv_store):
        kv_store.set("a", "1")

        assert kv_store.get("a") == "1"

    def test_set_overwrites(self, kv_store):
        kv_store.set("a", "1")
        kv_store.set("a", "2")

        assert kv_store.get("a") == "2"
        assert kv_store.keys() == ["a"]

    def test_delete(self, kv_store):
        kv_store.set("a", "1")

        kv_store.delete("a")

        assert kv_store.get("a") is None

    def test_delete_missing_is_not_an_error(self, kv_store):
        kv_store.delete("never-set")

    def test_keys_by_prefix(self, kv_store):
        kv_store.set("inspection_draft_2", "{}")
        kv_store.set("inspector_tasks_1", "[]")
        kv_store.set("inspection_draft_1", "{}")

        assert kv_store.keys("inspection_draft_") == ["inspection_draft_1", "inspection_draft_2"]
