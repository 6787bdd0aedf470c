"""ReferenceStore loading and lookup smoke tests.

Validates that ReferenceStore loads the packaged YAML correctly and that
lookup helpers return expected results.

Expected contents (from data/const/ and data/rules/):
    6 domains, 19 reverse-coded items, 13 feedback rules,
    overall reference mean 3.46 / sd 0.65
"""

import pytest
from pydantic import ValidationError

from survey_scoring.models.enums import RiskTier
from survey_scoring.reference import ReferenceStore, load_yaml


EXPECTED_STATS = {
    "physicalChange": (3.09, 0.95),
    "healthManagement": (3.63, 0.76),
    "socialSupport": (3.84, 0.94),
    "psychologicalBurden": (3.08, 0.91),
    "socialBurden": (3.39, 1.20),
    "resilience": (4.28, 0.72),
}


# =====================================================================
# Loading tests
# =====================================================================


def test_store_loads_six_domains_in_order(store):
    """The six domains load in instrument order."""
    assert store.domain_ids == list(EXPECTED_STATS)


@pytest.mark.parametrize("domain_id,stats", EXPECTED_STATS.items())
def test_domain_reference_stats(store, domain_id, stats):
    """Each domain carries the published reference mean and SD."""
    d = store.get_domain(domain_id)
    assert (d.mean, d.sd) == stats
    assert d.label, f"Domain {domain_id} missing label"


def test_overall_reference_entry(store):
    """The overall entry is separate from the six domains."""
    assert store.overall.id == "overall"
    assert (store.overall.mean, store.overall.sd) == (3.46, 0.65)
    assert "overall" not in store.domain_ids


def test_domain_items_cover_q1_to_q31(store):
    """Every item q1..q31 belongs to exactly one domain."""
    items = [k for d in store.domains for k in d.items]
    assert items == [f"q{i}" for i in range(1, 32)]


def test_reverse_coded_items(store):
    """Items 1-8 and 18-28 are reverse-coded, nothing else."""
    assert store.reverse_coded == frozenset(range(1, 9)) | frozenset(range(18, 29))


def test_feedback_rules_in_file_order(store):
    """Rules load in table order with unique ids."""
    ids = [r.id for r in store.feedback_rules]
    assert ids == [
        "counselling",
        "resilience_high", "resilience_mid", "resilience_low",
        "q13_1_1", "q13_1_2", "q13_1_3", "q13_1_4", "q13_1_5", "q13_1_6",
        "alcohol_warning", "smoke_warning",
        "exercise",
    ]


def test_comment_templates_cover_every_tier(store):
    """Both audiences have a comment for every tier, and they differ."""
    for tier in RiskTier:
        patient = store.comments.for_tier(tier, "patient")
        worker = store.comments.for_tier(tier, "social_worker")
        assert patient and worker
        assert patient != worker
    assert store.comments.no_data == "해당 영역(섹션)은 응답하지 않아 점수 산출이 불가합니다."


# =====================================================================
# Lookup helpers
# =====================================================================


def test_cutoff_is_mean_minus_sd(store):
    d = store.get_domain("psychologicalBurden")
    assert d.cutoff == pytest.approx(2.17)


def test_get_domain_accepts_legacy_alias(store):
    """The historical misspelling resolves to psychologicalBurden."""
    assert store.get_domain("psycnologicalBurden").id == "psychologicalBurden"


def test_get_domain_unknown_raises(store):
    with pytest.raises(KeyError):
        store.get_domain("nope")


class TestCanonicalize:
    """Alias resolution for domain-keyed maps."""

    def test_legacy_key_renamed(self, store):
        assert store.canonicalize({"psycnologicalBurden": 2.5}) == {"psychologicalBurden": 2.5}

    def test_canonical_key_wins(self, store):
        out = store.canonicalize({"psychologicalBurden": 3.0, "psycnologicalBurden": 2.0})
        assert out == {"psychologicalBurden": 3.0}

    def test_legacy_fills_missing_canonical(self, store):
        out = store.canonicalize({"psychologicalBurden": None, "psycnologicalBurden": 2.0})
        assert out == {"psychologicalBurden": 2.0}

    def test_none_mapping(self, store):
        assert store.canonicalize(None) == {}

    def test_unrelated_keys_untouched(self, store):
        assert store.canonicalize({"resilience": 4.0, "extra": 1}) == {"resilience": 4.0, "extra": 1}

    @pytest.mark.parametrize("legacy,canonical", [
        ("psycnological_burden", "psychologicalBurden"),
        ("health_management", "healthManagement"),
        ("physical_change", "physicalChange"),
        ("social_support", "socialSupport"),
        ("social_burden", "socialBurden"),
    ])
    def test_snake_case_key_renamed(self, store, legacy, canonical):
        assert store.canonicalize({legacy: 3.0}) == {canonical: 3.0}

    def test_first_non_none_alias_wins(self, store):
        out = store.canonicalize({"psycnologicalBurden": None, "psycnological_burden": 2.0})
        assert out == {"psychologicalBurden": 2.0}


# =====================================================================
# Failure modes
# =====================================================================


def test_missing_directory_raises(tmp_path):
    s = ReferenceStore(tmp_path)
    with pytest.raises(FileNotFoundError):
        s.load()


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "absent.yaml")


def test_invalid_sd_rejected(tmp_path):
    """A non-positive reference SD fails validation at load time."""
    const = tmp_path / "const"
    rules = tmp_path / "rules"
    const.mkdir()
    rules.mkdir()
    (const / "domains.yaml").write_text(
        "reverse_coded: []\n"
        "domains:\n"
        "  - {id: a, name: A, label: A, items: [q1], mean: 3.0, sd: 0}\n"
        "overall: {id: overall, name: O, label: O, mean: 3.0, sd: 1.0}\n",
        encoding="utf-8",
    )
    with pytest.raises(ValidationError):
        ReferenceStore(tmp_path).load()
