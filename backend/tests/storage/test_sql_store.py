"""Tests for the SQLAlchemy-backed document store over SQLite + FTS5."""

from collections.abc import Iterator
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app import models
from app.crud.legal import SqlDocumentStore
from app.models import (
    Base,
    DocumentStatus,
    LegalDocument,
    LegalProvision,
    create_fts_index,
    make_session_factory,
)
from citation_engine.citation.validator import validate_citation
from citation_engine.provisions.candidates import build_provision_candidates
from citation_engine.store import (
    DocumentRecord,
    DocumentStore,
    InMemoryDocumentStore,
    ProvisionRecord,
    ProvisionStore,
    QuerySyntaxError,
)
from citation_engine.tools.provisions import get_provision
from citation_engine.tools.search import search_legislation


def _documents() -> list[LegalDocument]:
    abgb = LegalDocument(
        id="gesetz-10001622",
        title="Allgemeines bürgerliches Gesetzbuch",
        short_name="ABGB",
        status=DocumentStatus.IN_FORCE,
        in_force_date=date(1812, 1, 1),
    )
    abgb.provisions = [
        LegalProvision(
            provision_ref="para1",
            section="1",
            content="JGS Nr. 946/1811\n§ 1\nDer Inbegriff der Gesetze macht das bürgerliche Recht aus. § 1.",
            order_index=1,
        ),
        LegalProvision(
            provision_ref="para2",
            section="§ 2",
            content="Sobald ein Gesetz gehörig kund gemacht worden ist, kann sich niemand entschuldigen.",
            order_index=2,
        ),
    ]
    bvg = LegalDocument(
        id="gesetz-10000138",
        title="Bundes-Verfassungsgesetz",
        short_name="B-VG",
        status=DocumentStatus.IN_FORCE,
    )
    bvg.provisions = [
        LegalProvision(
            provision_ref="para1",
            section="1",
            content="Österreich ist eine demokratische Republik. Ihr Recht geht vom Volk aus.",
            order_index=1,
        ),
    ]
    eheg = LegalDocument(
        id="gesetz-10001703",
        title="Ehegesetz",
        short_name="EheG",
        status=DocumentStatus.REPEALED,
    )
    eheg.provisions = [
        LegalProvision(provision_ref="para1", section="1", content="Aufgehoben.", order_index=1),
    ]
    aerzteg = LegalDocument(
        id="gesetz-20001016",
        title="Ärztegesetz 1998",
        short_name="ÄrzteG",
        status=DocumentStatus.IN_FORCE,
    )
    aerzteg.provisions = [
        LegalProvision(
            provision_ref="para1",
            section="1",
            content="Der Arzt ist zur Ausübung der Medizin berufen.",
            order_index=1,
        ),
    ]
    return [abgb, bvg, eheg, aerzteg]


@pytest.fixture
def session() -> Iterator[Session]:
    """In-memory SQLite database with four statutes and an FTS5 index."""
    factory = make_session_factory("sqlite://")
    with factory() as session:
        Base.metadata.create_all(session.get_bind())
        session.add_all(_documents())
        session.commit()
        try:
            create_fts_index(session.connection())
        except OperationalError:
            pytest.skip("SQLite was built without FTS5")
        session.commit()
        yield session
    factory.kw["bind"].dispose()


@pytest.fixture
def sql_store(session: Session) -> SqlDocumentStore:
    return SqlDocumentStore(session)


class TestSqlDocumentStore:
    """Tests for SqlDocumentStore lookups."""

    def test_satisfies_protocols(self, sql_store: SqlDocumentStore) -> None:
        assert isinstance(sql_store, DocumentStore)
        assert isinstance(sql_store, ProvisionStore)

    @pytest.mark.parametrize(
        "term",
        ["gesetz-10001622", "GESETZ-10001622", "ABGB", "abgb", "bürgerliches", " Gesetzbuch "],
    )
    def test_resolve_id(self, sql_store: SqlDocumentStore, term: str) -> None:
        assert sql_store.resolve_id(term) == "gesetz-10001622"

    def test_substring_prefers_shortest_title(self, sql_store: SqlDocumentStore) -> None:
        # "gesetz" occurs in every title; "Ehegesetz" is the shortest
        assert sql_store.resolve_id("gesetz") == "gesetz-10001703"

    @pytest.mark.parametrize("term", ["ärztegesetz 1998", "ÄRZTEGESETZ 1998", "ärzteg", "ärzte"])
    def test_umlaut_case_is_folded(self, sql_store: SqlDocumentStore, term: str) -> None:
        assert sql_store.resolve_id(term) == "gesetz-20001016"

    @pytest.mark.parametrize("term", ["", "%", "_", "Seerechtsgesetz"])
    def test_unresolved(self, sql_store: SqlDocumentStore, term: str) -> None:
        assert sql_store.resolve_id(term) is None

    def test_get_document(self, sql_store: SqlDocumentStore) -> None:
        doc = sql_store.get_document("gesetz-10001622")
        assert doc is not None
        assert doc.title == "Allgemeines bürgerliches Gesetzbuch"
        assert doc.status == "in_force"
        assert doc.document_type == "statute"
        assert doc.in_force_date == date(1812, 1, 1)
        assert sql_store.get_document("gesetz-0") is None

    def test_find_provision_by_decorated_section(self, sql_store: SqlDocumentStore) -> None:
        provision = sql_store.find_provision("gesetz-10001622", build_provision_candidates("2"))
        assert provision is not None
        assert provision.provision_ref == "para2"

    def test_provision_exists_is_scoped(self, sql_store: SqlDocumentStore) -> None:
        candidates = build_provision_candidates("§ 2")
        assert sql_store.provision_exists("gesetz-10001622", candidates)
        assert not sql_store.provision_exists("gesetz-10000138", candidates)
        assert not sql_store.provision_exists("gesetz-10001622", build_provision_candidates(""))

    def test_list_provisions(self, sql_store: SqlDocumentStore) -> None:
        provisions = sql_store.list_provisions("gesetz-10001622", 10)
        assert [p.provision_ref for p in provisions] == ["para1", "para2"]
        assert len(sql_store.list_provisions("gesetz-10001622", 1)) == 1


class TestSqlSearch:
    """Tests for FTS5 search through SqlDocumentStore."""

    def test_prefix_match_with_snippet(self, sql_store: SqlDocumentStore) -> None:
        hits = sql_store.search_provisions('"Republ"*')
        assert len(hits) == 1
        assert hits[0].document_title == "Bundes-Verfassungsgesetz"
        assert ">>>Republik<<<" in hits[0].snippet
        assert hits[0].relevance > 0

    def test_filters(self, sql_store: SqlDocumentStore) -> None:
        assert len(sql_store.search_provisions('"Recht"*')) == 2
        assert len(sql_store.search_provisions('"Recht"*', document_id="gesetz-10000138")) == 1
        assert sql_store.search_provisions('"Aufgehoben"', status="in_force") == []
        assert len(sql_store.search_provisions('"Aufgehoben"', status="repealed")) == 1

    def test_limit(self, sql_store: SqlDocumentStore) -> None:
        assert len(sql_store.search_provisions('"Recht"*', limit=1)) == 1

    def test_unterminated_string_raises(self, sql_store: SqlDocumentStore) -> None:
        with pytest.raises(QuerySyntaxError):
            sql_store.search_provisions('"Republik')

    def test_session_usable_after_syntax_error(self, sql_store: SqlDocumentStore) -> None:
        with pytest.raises(QuerySyntaxError):
            sql_store.search_provisions('"Republik')
        assert sql_store.resolve_id("ABGB") == "gesetz-10001622"


class TestEngineOverSql:
    """The engine operations work unchanged over the SQL store."""

    def test_validate_citation(self, sql_store: SqlDocumentStore) -> None:
        result = validate_citation("§ 2 ABGB", sql_store)
        assert result.document_exists
        assert result.provision_exists
        assert result.warnings == []

    def test_validate_repealed(self, sql_store: SqlDocumentStore) -> None:
        result = validate_citation("§ 1, Ehegesetz", sql_store)
        assert result.warnings == ["This statute has been repealed"]

    def test_lowercase_umlaut_title_resolves_like_in_memory(
        self, sql_store: SqlDocumentStore
    ) -> None:
        memory_store = InMemoryDocumentStore(
            documents=[
                DocumentRecord(
                    id="gesetz-20001016",
                    title="Ärztegesetz 1998",
                    short_name="ÄrzteG",
                    status="in_force",
                )
            ],
            provisions=[
                ProvisionRecord(
                    document_id="gesetz-20001016",
                    provision_ref="para1",
                    section="1",
                    content="Der Arzt ist zur Ausübung der Medizin berufen.",
                )
            ],
        )
        sql_result = validate_citation("§ 1, ärztegesetz", sql_store)
        memory_result = validate_citation("§ 1, ärztegesetz", memory_store)
        assert sql_result.document_exists
        assert sql_result.provision_exists
        assert sql_result.document_title == "Ärztegesetz 1998"
        assert sql_result.warnings == memory_result.warnings == []

    def test_get_provision_cleans_content(self, sql_store: SqlDocumentStore) -> None:
        lookup = get_provision(sql_store, "ABGB", section="1")
        assert lookup.results.content == "Der Inbegriff der Gesetze macht das bürgerliche Recht aus."

    def test_search_with_fallback(self, sql_store: SqlDocumentStore) -> None:
        hits = search_legislation(sql_store, '"Republik')
        assert [h.document_id for h in hits] == ["gesetz-10000138"]
        hits = search_legislation(sql_store, "Republik Seeschifffahrt")
        assert [h.document_id for h in hits] == ["gesetz-10000138"]


class TestStorageFaults:
    """A broken database reads as "not found" rather than raising."""

    @pytest.fixture
    def empty_store(self) -> Iterator[SqlDocumentStore]:
        factory = make_session_factory("sqlite://")
        with factory() as session:
            yield SqlDocumentStore(session)
            session.get_bind().dispose()

    def test_lookups_return_nothing(self, empty_store: SqlDocumentStore) -> None:
        assert empty_store.resolve_id("ABGB") is None
        assert empty_store.get_document("gesetz-10001622") is None
        assert empty_store.find_provision("gesetz-10001622", build_provision_candidates("1")) is None
        assert empty_store.list_provisions("gesetz-10001622", 10) == []
        assert empty_store.search_provisions('"Recht"*') == []

    def test_validation_reports_not_found(self, empty_store: SqlDocumentStore) -> None:
        result = validate_citation("§ 1 ABGB", empty_store)
        assert not result.document_exists
        assert result.warnings == ['Document "ABGB" not found in database']


class TestSessionFactory:
    """Tests for make_session_factory."""

    def test_sessions_share_one_engine(self) -> None:
        factory = make_session_factory("sqlite://")
        with factory() as first, factory() as second:
            assert first.get_bind() is second.get_bind()
            assert str(first.get_bind().url) == "sqlite://"
        first.get_bind().dispose()

    def test_objects_survive_commit(self) -> None:
        factory = make_session_factory("sqlite://")
        with factory() as session:
            Base.metadata.create_all(session.get_bind())
            doc = LegalDocument(id="gesetz-1", title="Testgesetz")
            session.add(doc)
            session.commit()
            session.close()
            assert doc.title == "Testgesetz"
            session.get_bind().dispose()

    def test_no_engine_per_call_helper_is_exported(self) -> None:
        assert "session_scope" not in models.__all__
        assert not hasattr(models, "session_scope")
