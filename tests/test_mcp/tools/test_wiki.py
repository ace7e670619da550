"""Tests for the wiki tool handlers against a real temporary repository.

Handlers are called through ToolRegistry so error translation is part of
what is exercised.
"""

import pytest

from goiki.mcp.tools import ALL_SPECS, ToolRegistry, WIKI_SPECS


@pytest.fixture
def registry():
    return ToolRegistry(ALL_SPECS)


def _text(result):
    return result.content[0].text


class TestSpecs:
    def test_tool_names(self):
        assert [s.tool.name for s in WIKI_SPECS] == [
            "wiki_get",
            "wiki_put",
            "wiki_history",
            "wiki_search",
        ]

    def test_search_query_documented_as_literal(self):
        search = next(s.tool for s in WIKI_SPECS if s.tool.name == "wiki_search")

        assert "literal" in search.description

    def test_only_put_writes(self):
        assert [s.tool.name for s in WIKI_SPECS if not s.read_only] == ["wiki_put"]

    def test_schemas(self):
        for spec in WIKI_SPECS:
            schema = spec.tool.inputSchema
            assert schema["type"] == "object"
            assert set(schema["required"]) <= set(schema["properties"])


class TestWikiPutGet:
    async def test_put_then_get(self, registry, store):
        put = await registry.call_tool(
            "wiki_put",
            {"title": "FrontPage", "body": "Hello\n", "message": "start"},
            store,
        )
        get = await registry.call_tool("wiki_get", {"title": "FrontPage"}, store)

        assert not put.isError
        assert put.structuredContent == {"title": "FrontPage", "created": True}
        assert _text(put) == "Created page 'FrontPage'."
        assert get.structuredContent == {
            "title": "FrontPage",
            "body": "Hello\n",
            "revision": "HEAD",
        }
        assert _text(get).startswith("# FrontPage\nRevision: HEAD\n")

    async def test_put_with_author(self, registry, store):
        await registry.call_tool(
            "wiki_put",
            {
                "title": "A",
                "body": "x",
                "author_name": "Ann Smith",
                "author_email": "ann@example.com",
            },
            store,
        )

        assert store.history("A")[0].author.name == "Ann Smith"

    async def test_put_existing_page(self, registry, store):
        store.save("A", "one")

        result = await registry.call_tool("wiki_put", {"title": "A", "body": "two"}, store)

        assert result.structuredContent == {"title": "A", "created": False}
        assert _text(result) == "Saved page 'A'."

    async def test_get_defaults_to_index_page(self, registry, git_repo, revision_store):
        from goiki.store import ContentStore, PathMapper

        store = ContentStore(revision_store, PathMapper(git_repo, "md"), index_page="Home")
        store.save("Home", "welcome")

        result = await registry.call_tool("wiki_get", {}, store)

        assert result.structuredContent["title"] == "Home"
        assert result.structuredContent["body"] == "welcome"

    async def test_get_missing_index_page(self, registry, store):
        result = await registry.call_tool("wiki_get", {}, store)

        assert result.isError is True
        assert "not_found" in _text(result)

    async def test_get_earlier_revision(self, registry, store):
        store.save("A", "one")
        oldest = store.history("A")[-1].object_id
        store.save("A", "two")

        result = await registry.call_tool(
            "wiki_get", {"title": "A", "revision": oldest}, store
        )

        assert result.structuredContent["body"] == "one"
        assert result.structuredContent["revision"] == oldest

    async def test_get_missing_page(self, registry, store):
        store.save("A", "one")

        result = await registry.call_tool("wiki_get", {"title": "Nope"}, store)

        assert result.isError is True
        assert "Error (not_found): Page 'Nope' not found" in _text(result)

    async def test_get_invalid_revision(self, registry, store):
        result = await registry.call_tool(
            "wiki_get", {"title": "A", "revision": "--all"}, store
        )

        assert result.isError is True
        assert "validation_error" in _text(result)

    async def test_put_invalid_title(self, registry, store):
        result = await registry.call_tool(
            "wiki_put", {"title": "../x", "body": "y"}, store
        )

        assert result.isError is True
        assert "Title cannot contain '..'" in _text(result)

    @pytest.mark.parametrize(
        "tool,args,param",
        [
            ("wiki_put", {"body": "x"}, "title"),
            ("wiki_put", {"title": "A"}, "body"),
            ("wiki_history", {}, "title"),
            ("wiki_search", {}, "query"),
        ],
    )
    async def test_missing_parameters(self, registry, store, tool, args, param):
        result = await registry.call_tool(tool, args, store)

        assert result.isError is True
        assert f"{param} is required" in _text(result)

    async def test_put_empty_body_allowed(self, registry, store):
        store.save("A", "one")

        result = await registry.call_tool("wiki_put", {"title": "A", "body": ""}, store)

        assert not result.isError
        assert store.load("A").body == ""


class TestWikiHistory:
    async def test_history(self, registry, store):
        store.save("A", "one", "first")
        store.save("A", "two", "second")

        result = await registry.call_tool("wiki_history", {"title": "A"}, store)

        revisions = result.structuredContent["revisions"]
        assert [r["description"] for r in revisions] == ["second", "first"]
        assert revisions[0]["title"] == "A"
        assert revisions[0]["author"] == {"name": "Test User", "email": "test@example.com"}
        assert _text(result).startswith("History of A (2 revisions):")

    async def test_no_history(self, registry, store):
        result = await registry.call_tool("wiki_history", {"title": "A"}, store)

        assert not result.isError
        assert _text(result) == "No revisions found for 'A'."
        assert result.structuredContent == {"title": "A", "revisions": []}


class TestWikiSearch:
    async def test_search(self, registry, store):
        store.save("A", "The quick fox\n")
        store.save("B", "lazy dog\n")

        result = await registry.call_tool("wiki_search", {"query": "QUICK"}, store)

        assert result.structuredContent == {
            "query": "QUICK",
            "results": [{"title": "A", "content": "The quick fox"}],
            "total": 1,
        }
        assert "- A: The quick fox" in _text(result)

    async def test_limit(self, registry, store):
        store.save("A", "fox 1\nfox 2\nfox 3\n")

        result = await registry.call_tool(
            "wiki_search", {"query": "fox", "limit": 2}, store
        )

        assert len(result.structuredContent["results"]) == 2
        assert result.structuredContent["total"] == 3
        assert "(showing 2 of 3)" in _text(result)

    async def test_no_results(self, registry, store):
        store.save("A", "one\n")

        result = await registry.call_tool("wiki_search", {"query": "absent"}, store)

        assert not result.isError
        assert _text(result) == "No wiki pages found matching query."
