"""Tests for local state loading and the catalog seed."""

from dataclasses import replace

import pytest

from pharmacy_consult.catalog_seed import INITIAL_PRODUCTS
from pharmacy_consult.codec import MalformedDocumentError, record_from_dict, record_to_dict
from pharmacy_consult.domain.records import Pharmacist, PharmacyConfig
from pharmacy_consult.domain.survey import (
    BloodTestResult,
    CurrentSupplements,
    PregnancyStage,
    Symptom,
)
from pharmacy_consult.services.state import (
    CONFIG_KEY,
    PRODUCTS_KEY,
    RECORDS_KEY,
    LocalStateService,
)
from tests.conftest import InMemoryLocalStore, make_record, make_survey


def test_first_load_seeds_catalog() -> None:
    store = InMemoryLocalStore()
    state = LocalStateService(store)

    products = state.load_products()

    assert [product.id for product in products] == [p.id for p in INITIAL_PRODUCTS]
    assert PRODUCTS_KEY in store.documents
    assert sum(1 for product in products if product.is_omega3) == 3


def test_config_merges_over_defaults() -> None:
    store = InMemoryLocalStore(documents={CONFIG_KEY: {"pharmacyName": "새약국"}})

    config = LocalStateService(store).load_config()

    assert config.pharmacy_name == "새약국"
    assert config.current_pharmacist_id == PharmacyConfig().current_pharmacist_id


def test_corrupt_records_document_raises() -> None:
    store = InMemoryLocalStore(documents={RECORDS_KEY: {"id": "RE-1"}})

    with pytest.raises(MalformedDocumentError):
        LocalStateService(store).load_records()


def test_record_document_uses_camel_case_fields() -> None:
    record = make_record("RE-1", "2026-01-01T00:00:00+00:00")
    survey = make_survey(
        PregnancyStage.LATE,
        vitamin_d_level=BloodTestResult.DEFICIENT,
        symptoms=frozenset({Symptom.CRAMPS}),
        current_supplements=CurrentSupplements(iron=True, detected_names=("철분",)),
    )
    document = record_to_dict(replace(record, survey=survey))

    assert document["surveyData"]["stage"] == "임신 후기 (28주~40주)"  # type: ignore[index]
    assert document["surveyData"]["currentSupplements"]["iron"] is True  # type: ignore[index]
    assert document["selectedProducts"][0]["isActive"] is True  # type: ignore[index]
    assert record_from_dict(document).survey == survey


def test_record_from_original_app_document() -> None:
    document = {
        "id": "RE-1700000000000",
        "date": "2023-11-14T22:13:20.000Z",
        "pharmacistName": "송은주 약사",
        "customerName": "고객",
        "surveyData": {
            "customerName": "고객",
            "phone": "010-0000-0000",
            "email": "",
            "ageGroup": "30대",
            "isOver35": True,
            "stage": "임신 준비기",
            "currentSupplements": {"folicAcid": True, "others": ""},
            "vitaminDLevel": "모름",
            "hbLevel": "모름",
            "symptoms": ["변비"],
            "notes": "",
            "pharmacistName": "송은주 약사",
        },
        "recommendedProductNames": [],
        "selectedProducts": [
            {
                "id": "2",
                "name": "활성형 엽산 620",
                "images": [],
                "price": 30000,
                "storage": "상온",
                "usage": "1일 1회 1정 식사 직후",
                "ingredients": [{"name": "엽산", "amount": 620, "unit": "㎍"}],
                "isActive": True,
                "expirationDate": "2026-06-30",
                "pillType": "round-white",
            }
        ],
        "totalPrice": 30000,
        "purchaseStatus": "구매 완료",
        "counselingMethod": "태블릿 기반 대면 상담",
        "dispensingDays": 30,
    }

    record = record_from_dict(document)

    assert record.survey.stage is PregnancyStage.PREPARATION
    assert record.survey.current_supplements.folic_acid
    assert record.survey.symptoms == frozenset({Symptom.CONSTIPATION})
    assert record.selected_products[0].ingredients[0].amount == 620


def test_invalid_product_document_raises() -> None:
    store = InMemoryLocalStore(
        documents={PRODUCTS_KEY: [{"id": "1", "name": "엽산", "price": -5}]}
    )

    with pytest.raises(MalformedDocumentError):
        LocalStateService(store).load_products()


def test_pharmacists_round_trip() -> None:
    state = LocalStateService(InMemoryLocalStore())
    pharmacists = [Pharmacist(id="7", name="김민지 약사", is_active=False)]

    state.save_pharmacists(pharmacists)

    assert state.load_pharmacists() == pharmacists
