from decimal import Decimal

from common.compliance_engine.config import LtvRatioRuleConfig, RelatedPartyExposureRuleConfig
from common.compliance_engine.models import Severity, ValidationStatus
from common.compliance_engine.rules.br003_impaired_allowance import BR003_IMPAIRED_ALLOWANCE
from common.compliance_engine.rules.br004_property_ltv import BR004_PROPERTY_LTV
from common.compliance_engine.rules.br005_maturity_after_origination import BR005_MATURITY_AFTER_ORIGINATION
from common.compliance_engine.rules.br006_related_party_exposure import BR006_RELATED_PARTY_EXPOSURE
from common.compliance_engine.rules.br007_derivative_notional_positive import BR007_DERIVATIVE_NOTIONAL_POSITIVE
from common.compliance_engine.rules.gl001_transaction_integrity import GL001_TRANSACTION_INTEGRITY
from common.compliance_engine.rules.reg001_sme_classification import REG001_SME_CLASSIFICATION


def test_br003_warns_on_impaired_facility_without_allowance(make_snapshot, make_facility):
    snapshot = make_snapshot(
        facilities=[
            make_facility("FAC001", risk_classification="Substandard"),
            make_facility("FAC002", risk_classification="Doubtful", loss_allowance="25000"),
            make_facility("FAC003", risk_classification="Pass"),
        ]
    )
    res = BR003_IMPAIRED_ALLOWANCE().evaluate(snapshot)
    assert [(r.record_id, r.status) for r in res] == [("FAC001", ValidationStatus.WARNING)]


def test_br004_warns_on_missing_or_excessive_ltv(make_snapshot, make_facility):
    snapshot = make_snapshot(
        facilities=[
            make_facility("FAC001", property_type="Residential", ltv_ratio=None),
            make_facility("FAC002", property_type="Commercial", ltv_ratio="120"),
            make_facility("FAC003", property_type="Residential", ltv_ratio="80"),
            make_facility("FAC004", ltv_ratio="150"),
        ]
    )
    res = BR004_PROPERTY_LTV().evaluate(snapshot)
    assert [r.record_id for r in res] == ["FAC001", "FAC002"]
    assert {r.status for r in res} == {ValidationStatus.WARNING}


def test_br004_zero_or_negative_ltv_counts_as_missing(make_snapshot, make_facility):
    snapshot = make_snapshot(
        facilities=[
            make_facility("FAC001", property_type="Residential", ltv_ratio="0"),
            make_facility("FAC002", property_type="Commercial", ltv_ratio="-5"),
            make_facility("FAC003", property_type="Residential", ltv_ratio="0.01"),
        ]
    )
    res = BR004_PROPERTY_LTV().evaluate(snapshot)
    assert [r.record_id for r in res] == ["FAC001", "FAC002"]
    assert all("no valid LTV ratio" in r.message for r in res)



def test_br004_threshold_is_configurable(make_snapshot, make_facility):
    snapshot = make_snapshot(facilities=[make_facility("FAC001", property_type="Residential", ltv_ratio="80")])
    res = BR004_PROPERTY_LTV(LtvRatioRuleConfig(max_ltv_ratio=Decimal("75"))).evaluate(snapshot)
    assert res[0].status == ValidationStatus.WARNING


def test_br005_fails_when_maturity_not_after_origination(make_snapshot, make_facility):
    snapshot = make_snapshot(
        facilities=[
            make_facility("FAC001", origination_date="2024-06-01", maturity_date="2024-06-01"),
            make_facility("FAC002", origination_date="2024-06-01", maturity_date="2023-06-01"),
            make_facility("FAC003", origination_date="garbage", maturity_date="2023-06-01"),
            make_facility("FAC004"),
        ]
    )
    res = BR005_MATURITY_AFTER_ORIGINATION().evaluate(snapshot)
    assert [r.record_id for r in res] == ["FAC001", "FAC002"]
    assert {r.status for r in res} == {ValidationStatus.FAIL}


def test_br006_sums_related_party_exposure_across_facilities(make_snapshot, make_counterparty, make_facility):
    snapshot = make_snapshot(
        counterparties=[
            make_counterparty("CP001", is_related_party=True),
            make_counterparty("CP002", is_related_party=True),
            make_counterparty("CP003"),
        ],
        facilities=[
            make_facility("FAC001", counterparty_id="CP001", outstanding_amount="6000000", limit_amount="9000000"),
            make_facility("FAC002", counterparty_id="CP001", outstanding_amount="5000000", limit_amount="9000000"),
            make_facility("FAC003", counterparty_id="CP002", outstanding_amount="10000000", limit_amount="20000000"),
            make_facility("FAC004", counterparty_id="CP003", outstanding_amount="50000000", limit_amount="90000000"),
        ],
    )
    res = BR006_RELATED_PARTY_EXPOSURE().evaluate(snapshot)
    assert len(res) == 1
    assert res[0].record_id == "CP001"
    assert res[0].status == ValidationStatus.WARNING
    assert res[0].current_value == Decimal("11000000")

    lowered = BR006_RELATED_PARTY_EXPOSURE(RelatedPartyExposureRuleConfig(exposure_threshold=Decimal("5000000")))
    assert [r.record_id for r in lowered.evaluate(snapshot)] == ["CP001", "CP002"]


def test_br007_fails_on_non_positive_notional(make_snapshot):
    snapshot = make_snapshot(
        derivatives=[
            {"trade_id": "TRD001", "counterparty_id": "CP001", "notional_amount": "0"},
            {"trade_id": "TRD002", "counterparty_id": "CP001", "notional_amount": "-5"},
            {"trade_id": "TRD003", "counterparty_id": "CP001", "notional_amount": "1"},
        ]
    )
    res = BR007_DERIVATIVE_NOTIONAL_POSITIVE().evaluate(snapshot)
    assert [r.record_id for r in res] == ["TRD001", "TRD002"]


def test_gl001_checks_amount_and_distinct_accounts(make_snapshot, make_gl_transaction):
    snapshot = make_snapshot(
        gl_transactions=[
            make_gl_transaction("GL001", amount="0"),
            make_gl_transaction("GL002", debit_account="1200", credit_account="1200"),
            make_gl_transaction("GL003"),
        ]
    )
    res = GL001_TRANSACTION_INTEGRITY().evaluate(snapshot)
    assert [(r.record_id, r.field_name) for r in res] == [("GL001", "amount"), ("GL002", "credit_account")]
    assert res[0].severity == Severity.MEDIUM


def test_reg001_warns_when_sme_flag_on_ineligible_entity(make_snapshot, make_counterparty):
    snapshot = make_snapshot(
        counterparties=[
            make_counterparty("CP001", is_sme=True),
            make_counterparty("CP002", entity_type="Banks", is_sme=True),
            make_counterparty("CP003", entity_type="Banks"),
        ]
    )
    res = REG001_SME_CLASSIFICATION().evaluate(snapshot)
    assert [(r.record_id, r.status) for r in res] == [("CP002", ValidationStatus.WARNING)]
