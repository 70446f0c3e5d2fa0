from common.compliance_engine.models import ValidationStatus
from common.compliance_engine.rules.ic001_intercompany_matching import IC001_INTERCOMPANY_MATCHING
from common.compliance_engine.rules.xr001_facility_counterparty_exists import XR001_FACILITY_COUNTERPARTY_EXISTS
from common.compliance_engine.rules.xr002_derivative_counterparty_exists import XR002_DERIVATIVE_COUNTERPARTY_EXISTS
from common.compliance_engine.rules.xr003_gl_facility_exists import XR003_GL_FACILITY_EXISTS


def test_xr001_facility_counterparty_must_exist(make_snapshot, make_counterparty, make_facility):
    snapshot = make_snapshot(
        counterparties=[make_counterparty("CP001")],
        facilities=[
            make_facility("FAC001"),
            make_facility("FAC002", counterparty_id="CP404"),
            make_facility("FAC003", counterparty_id=None),
        ],
    )
    res = XR001_FACILITY_COUNTERPARTY_EXISTS().evaluate(snapshot)
    assert [(r.record_id, r.current_value) for r in res] == [("FAC002", "CP404")]


def test_xr002_derivative_counterparty_must_exist(make_snapshot, make_counterparty):
    snapshot = make_snapshot(
        counterparties=[make_counterparty("CP001")],
        derivatives=[
            {"trade_id": "TRD001", "counterparty_id": "CP001", "notional_amount": "10"},
            {"trade_id": "TRD002", "counterparty_id": "CP999", "notional_amount": "10"},
        ],
    )
    res = XR002_DERIVATIVE_COUNTERPARTY_EXISTS().evaluate(snapshot)
    assert [r.record_id for r in res] == ["TRD002"]
    assert res[0].status == ValidationStatus.FAIL


def test_xr003_gl_facility_reference_warns(make_snapshot, make_facility, make_gl_transaction):
    snapshot = make_snapshot(
        facilities=[make_facility("FAC001")],
        gl_transactions=[
            make_gl_transaction("GL001", facility_id="FAC001"),
            make_gl_transaction("GL002", facility_id="FAC404"),
            make_gl_transaction("GL003"),
        ],
    )
    res = XR003_GL_FACILITY_EXISTS().evaluate(snapshot)
    assert [(r.record_id, r.status) for r in res] == [("GL002", ValidationStatus.WARNING)]


def test_ic001_matches_mirrored_entries_one_to_one(make_snapshot, make_gl_transaction):
    snapshot = make_snapshot(
        gl_transactions=[
            make_gl_transaction("IC1", is_intercompany=True, entity_code="SG01", debit_account="1500", credit_account="2500"),
            make_gl_transaction("IC2", is_intercompany=True, entity_code="HK01", debit_account="2500", credit_account="1500"),
            # Second SG01 entry has no remaining partner.
            make_gl_transaction("IC3", is_intercompany=True, entity_code="SG01", debit_account="1500", credit_account="2500"),
            # Same entity cannot eliminate against itself.
            make_gl_transaction("IC4", is_intercompany=True, entity_code="SG01", debit_account="2500", credit_account="1500", amount="10.00"),
            make_gl_transaction("IC5", is_intercompany=True, entity_code="SG01", debit_account="1500", credit_account="2500", amount="10.00"),
        ]
    )
    res = IC001_INTERCOMPANY_MATCHING().evaluate(snapshot)
    assert [r.record_id for r in res] == ["IC3", "IC4", "IC5"]
    assert {r.status for r in res} == {ValidationStatus.WARNING}


def test_ic001_linked_facility_must_belong_to_related_party(
    make_snapshot, make_counterparty, make_facility, make_gl_transaction
):
    snapshot = make_snapshot(
        counterparties=[make_counterparty("CP001"), make_counterparty("CP002", is_related_party=True)],
        facilities=[make_facility("FAC001"), make_facility("FAC002", counterparty_id="CP002")],
        gl_transactions=[
            make_gl_transaction("IC1", is_intercompany=True, entity_code="SG01", facility_id="FAC001"),
            make_gl_transaction(
                "IC2", is_intercompany=True, entity_code="HK01", debit_account="4100", credit_account="1200",
                facility_id="FAC002",
            ),
        ],
    )
    res = IC001_INTERCOMPANY_MATCHING().evaluate(snapshot)
    assert [(r.record_id, r.field_name) for r in res] == [("IC1", "facility_id")]


def test_ic001_unmatched_entry_on_unrelated_facility_is_one_warning(
    make_snapshot, make_counterparty, make_facility, make_gl_transaction
):
    snapshot = make_snapshot(
        counterparties=[make_counterparty("CP001")],
        facilities=[make_facility("FAC001")],
        gl_transactions=[make_gl_transaction("IC1", is_intercompany=True, facility_id="FAC001")],
    )
    res = IC001_INTERCOMPANY_MATCHING().evaluate(snapshot)
    assert len(res) == 1
    assert res[0].status == ValidationStatus.WARNING
    assert res[0].field_name == "is_intercompany,facility_id"
    assert "no mirroring entry" in res[0].message and "not a related party" in res[0].message



def test_ic001_passes_without_intercompany_activity(make_snapshot, make_gl_transaction):
    snapshot = make_snapshot(gl_transactions=[make_gl_transaction("GL001")])
    assert IC001_INTERCOMPANY_MATCHING().evaluate(snapshot)[0].status == ValidationStatus.PASS
