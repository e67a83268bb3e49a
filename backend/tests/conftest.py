"""Shared fixtures: a small in-memory RIS corpus."""

from datetime import date

import pytest

from citation_engine.store import DocumentRecord, InMemoryDocumentStore, ProvisionRecord

ABGB_PARA_1 = "\n".join([
    "JGS Nr. 946/1811",
    "§ 1",
    "01.01.1812",
    "Der Inbegriff der Gesetze, wodurch die Privat-Rechte und Pflichten der "
    "Einwohner des Staates unter sich bestimmt werden, macht das bürgerliche "
    "Recht in demselben aus. § 1.",
])

DOCUMENTS = [
    DocumentRecord(
        id="gesetz-10001622",
        title="Allgemeines bürgerliches Gesetzbuch",
        short_name="ABGB",
        status="in_force",
        issued_date=date(1811, 6, 1),
        in_force_date=date(1812, 1, 1),
    ),
    DocumentRecord(
        id="gesetz-10001597",
        title="Datenschutzgesetz",
        short_name="DSG",
        status="amended",
        issued_date=date(1999, 8, 17),
        in_force_date=date(2000, 1, 1),
    ),
    DocumentRecord(
        id="gesetz-10000138",
        title="Bundes-Verfassungsgesetz",
        short_name="B-VG",
        status="in_force",
        in_force_date=date(1920, 11, 10),
    ),
    DocumentRecord(
        id="gesetz-10001703",
        title="Ehegesetz",
        short_name="EheG",
        status="repealed",
    ),
]

PROVISIONS = [
    ProvisionRecord(
        document_id="gesetz-10001622",
        provision_ref="para1",
        section="1",
        content=ABGB_PARA_1,
        order_index=1,
    ),
    ProvisionRecord(
        document_id="gesetz-10001622",
        provision_ref="para2",
        section="§ 2",
        content="Sobald ein Gesetz gehörig kund gemacht worden ist, kann sich niemand "
        "damit entschuldigen, dass ihm dasselbe nicht bekannt geworden sei.",
        order_index=2,
    ),
    ProvisionRecord(
        document_id="gesetz-10001597",
        provision_ref="para4a",
        section="4a",
        content="Die Verarbeitung personenbezogener Daten ist zulässig, soweit "
        "sie auf einer Rechtsgrundlage beruht.",
        title="Zulässigkeit der Verarbeitung",
        order_index=1,
    ),
    ProvisionRecord(
        document_id="gesetz-10000138",
        provision_ref="para1",
        section="1",
        content="\n".join([
            "BGBl. Nr. 1/1930",
            "Art. 1",
            "Österreich ist eine demokratische Republik. Ihr Recht geht vom Volk aus. Artikel 1.",
            "Staatsform, Demokratie, Grundprinzip",
        ]),
        order_index=1,
    ),
    ProvisionRecord(
        document_id="gesetz-10001703",
        provision_ref="para1",
        section="1",
        content="Aufgehoben.",
        order_index=1,
    ),
]


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """In-memory store with ABGB, DSG, B-VG and a repealed statute."""
    return InMemoryDocumentStore(documents=DOCUMENTS, provisions=PROVISIONS)
