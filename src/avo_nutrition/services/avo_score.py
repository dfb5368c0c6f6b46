"""AvoScore: nutrient-density heuristic score (0-100) with a letter grade.

Densities are taken per 100 kcal, with a calorie floor, to reduce serving-size
bias. Intended for lightweight feedback next to a food, not as medical advice.
Reason tags are localization keys; callers render them.
"""

from dataclasses import dataclass

from avo_nutrition.domain.avo_score import AvoScoreInput, AvoScoreResult, Grade

KCAL_FLOOR = 20.0

W_PROTEIN = 30.0
W_FIBER = 30.0
W_UNSAT = 27.0
W_SUGAR = 15.0
W_SODIUM = 12.0
W_SAT = 12.0
W_TRANS = 8.0
W_FAT = 2.0

# Normalizers, per 100 kcal.
N_PROTEIN = 10.0
N_FIBER = 5.0
N_UNSAT = 10.0
N_SUGAR = 12.0
N_SODIUM = 400.0
N_SAT = 4.0
N_TRANS = 0.5
N_FAT = 15.0

REASON_THRESHOLD = 6.0
POS_REASON_THRESHOLD = 5.0
SAT_REASON_THRESHOLD = 2.4

PROTEIN_BUFFER_THRESHOLD = 3.0
PROTEIN_SUGAR_BUFFER = 0.3
FIBER_BUFFER_THRESHOLD = 2.0
FIBER_SUGAR_BUFFER = 0.3
LACTOSE_PROTEIN_THRESHOLD = 5.0
LACTOSE_FAT_MAX = 1.5
LACTOSE_SUGAR_BUFFER = 0.5

PLAIN_DAIRY_PROTEIN_THRESHOLD = 5.0
PLAIN_DAIRY_FAT_MAX = 2.0
PLAIN_DAIRY_SUGAR_MAX = 18.0
PLAIN_DAIRY_BONUS = 6.0

REASON_NO_MACRO_DATA = "avo_score.reasons.no_macro_data"
REASON_BALANCED = "avo_score.reasons.balanced"

_POSITIVE_LABELS = {
    "protein": "avo_score.reasons.high_protein",
    "fiber": "avo_score.reasons.high_fiber",
    "unsat_fat": "avo_score.reasons.high_unsat_fat",
}
_NEGATIVE_LABELS = {
    "sugar": "avo_score.reasons.high_sugar",
    "sodium": "avo_score.reasons.high_sodium",
    "sat_fat": "avo_score.reasons.high_sat_fat",
    "trans_fat": "avo_score.reasons.trans_fat",
    "fat": "avo_score.reasons.high_fat",
}


@dataclass(frozen=True)
class _Contribution:
    key: str
    value: float

    @property
    def label(self) -> str | None:
        if self.value >= 0:
            return _POSITIVE_LABELS.get(self.key)
        return _NEGATIVE_LABELS.get(self.key)


def compute_avo_score(nutrients: AvoScoreInput) -> AvoScoreResult:  # noqa: PLR0914
    """Score an absolute nutrient amount.

    Never raises; input is already coerced by AvoScoreInput.
    """
    k = max(nutrients.calories, KCAL_FLOOR) / 100

    net_carb_g = max(nutrients.carb_g - nutrients.fiber_g, 0.0)
    unsat_fat_g = max(nutrients.fat_g - nutrients.sat_fat_g - nutrients.trans_fat_g, 0.0)

    macro_kcal = (
        nutrients.protein_g * 4
        + nutrients.fat_g * 9
        + net_carb_g * 4
        + nutrients.fiber_g * 2
    )
    if macro_kcal <= 0:
        return AvoScoreResult(score=50.0, grade="C", reasons=(REASON_NO_MACRO_DATA,))

    protein = nutrients.protein_g / k
    fiber = nutrients.fiber_g / k
    unsat = unsat_fat_g / k
    sugar = nutrients.sugar_g / k
    sodium = nutrients.sodium_mg / k
    sat = nutrients.sat_fat_g / k
    trans = nutrients.trans_fat_g / k
    fat = nutrients.fat_g / k

    protein_score = _clamp01(protein / N_PROTEIN)
    fiber_score = _clamp01(fiber / N_FIBER)
    unsat_score = _clamp01(unsat / N_UNSAT)

    sugar_bad = _clamp01(sugar / N_SUGAR)
    if protein >= PROTEIN_BUFFER_THRESHOLD:
        sugar_bad *= PROTEIN_SUGAR_BUFFER
    if fiber >= FIBER_BUFFER_THRESHOLD:
        sugar_bad *= FIBER_SUGAR_BUFFER
    if protein >= LACTOSE_PROTEIN_THRESHOLD and fat <= LACTOSE_FAT_MAX and fiber == 0:
        sugar_bad *= LACTOSE_SUGAR_BUFFER

    sodium_bad = _clamp01(sodium / N_SODIUM)
    sat_bad = _clamp01(sat / N_SAT)
    trans_bad = _clamp01(trans / N_TRANS)
    fat_bad = _clamp01(fat / N_FAT)

    # Unsaturated fat only offsets the sat/trans penalty, never the total fat one.
    unsat_bonus = min(W_UNSAT * unsat_score, W_SAT * sat_bad + W_TRANS * trans_bad)

    positive = W_PROTEIN * protein_score + W_FIBER * fiber_score + unsat_bonus
    negative = (
        W_SUGAR * sugar_bad
        + W_SODIUM * sodium_bad
        + W_SAT * sat_bad
        + W_TRANS * trans_bad
        + W_FAT * fat_bad
    )
    raw = positive - negative

    if (
        protein >= PLAIN_DAIRY_PROTEIN_THRESHOLD
        and fat <= PLAIN_DAIRY_FAT_MAX
        and fiber == 0
        and sugar <= PLAIN_DAIRY_SUGAR_MAX
    ):
        raw += PLAIN_DAIRY_BONUS

    score = min(max(raw + 50, 0.0), 100.0)

    contributions = [
        _Contribution("protein", W_PROTEIN * protein_score),
        _Contribution("fiber", W_FIBER * fiber_score),
        _Contribution("unsat_fat", unsat_bonus),
        _Contribution("sugar", -W_SUGAR * sugar_bad),
        _Contribution("sodium", -W_SODIUM * sodium_bad),
        _Contribution(
            "sat_fat", -W_SAT * sat_bad if sat >= SAT_REASON_THRESHOLD else 0.0
        ),
        _Contribution("trans_fat", -W_TRANS * trans_bad),
        _Contribution("fat", -W_FAT * fat_bad),
    ]
    return AvoScoreResult(
        score=score, grade=grade_from_score(score), reasons=_select_reasons(contributions)
    )


def grade_from_score(score: float) -> Grade:
    """Map a 0-100 score to a letter grade."""
    if score >= 85:
        return "A"
    if score >= 70:
        return "B"
    if score >= 55:
        return "C"
    if score >= 40:
        return "D"
    return "F"


def _select_reasons(contributions: list[_Contribution]) -> tuple[str, ...]:
    """Pick up to two tags, leading with the strongest positive if any."""
    strong = sorted(
        (
            item
            for item in contributions
            if abs(item.value)
            >= (POS_REASON_THRESHOLD if item.value >= 0 else REASON_THRESHOLD)
        ),
        key=lambda item: abs(item.value),
        reverse=True,
    )
    reasons: list[str] = []
    used: set[str] = set()

    positives = [item for item in strong if item.value > 0]
    if positives and positives[0].label:
        reasons.append(positives[0].label)
        used.add(positives[0].key)

    for item in strong:
        if len(reasons) >= 2:
            break
        if item.key in used or item.label is None:
            continue
        reasons.append(item.label)
        used.add(item.key)

    if not reasons:
        reasons.append(REASON_BALANCED)
    return tuple(reasons)


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)
