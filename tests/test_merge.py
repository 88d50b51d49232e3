from lead_capture.merge import merge_card_fields, merge_nearby_selection
from lead_capture.models import Coordinate, ExtractedCardFields, LeadLocationRecord, NearbyMatch


def test_merge_card_fields_only_overwrites_with_non_empty_values() -> None:
    form = {"company": "Typed Co", "contact_name": "", "contact_email": "kept@example.com", "note": "hi"}
    fields = ExtractedCardFields(company="Acme Corp", contact_name="John Smith", phone="(512) 555-0100")

    merged = merge_card_fields(form, fields)

    assert merged == {
        "company": "Acme Corp",
        "contact_name": "John Smith",
        "contact_email": "kept@example.com",
        "contact_phone": "(512) 555-0100",
        "note": "hi",
    }
    assert form["company"] == "Typed Co"


def test_merge_card_fields_with_empty_result_is_a_no_op() -> None:
    form = {"company": "Typed Co"}

    assert merge_card_fields(form, ExtractedCardFields()) == form


def _match(lead_id: str, **display_fields) -> NearbyMatch:
    record = LeadLocationRecord(id=lead_id, display_fields=display_fields, coordinate=Coordinate(30.0, -97.0))
    return NearbyMatch(record=record, distance_meters=12.0)


def test_merge_nearby_selection_replaces_form_values_with_stored_ones() -> None:
    form = {"company": "", "contact_name": "Typed Name", "contact_phone": "555", "note": "hi"}

    merged = merge_nearby_selection(form, _match("lead-7", company="Contoso", contact_name=None, contact_phone="  "))

    assert merged == {
        "company": "Contoso",
        "contact_name": "",
        "contact_phone": "",
        "note": "hi",
        "lead_id": "lead-7",
    }


def test_picking_a_second_lead_leaves_nothing_from_the_first() -> None:
    first = _match("A", company="Alpha", contact_name="Ann Lee", contact_email="ann@alpha.com")
    second = _match("B", company="Beta", contact_name=None, contact_email="")

    merged = merge_nearby_selection(merge_nearby_selection({}, first), second)

    assert merged == {"company": "Beta", "contact_name": "", "contact_email": "", "lead_id": "B"}
