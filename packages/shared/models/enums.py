from enum import Enum


class MarkerType(str, Enum):
    DATE = "date"  # Absolute date, e.g. 03/14/2024
    POD = "pod"  # Post-operative day, e.g. POD#2
    RELATIVE = "relative"  # yesterday / today / this morning / N days ago


class EntityCategory(str, Enum):
    PROCEDURES = "procedures"
    MEDICATIONS = "medications"
    COMPLICATIONS = "complications"
    EXAM_FINDINGS = "exam_findings"


class SimilarityMethod(str, Enum):
    JACCARD = "jaccard"
    HYBRID = "hybrid"  # Jaccard blended with normalized Levenshtein


class DecisionCode(str, Enum):
    EXACT_DUPLICATE = "EXACT_DUPLICATE"
    NEAR_DUPLICATE = "NEAR_DUPLICATE"
    SENTENCE_DUPLICATE = "SENTENCE_DUPLICATE"
    NOTE_EMPTIED = "NOTE_EMPTIED"
    COMPLEMENTARY_MERGE = "COMPLEMENTARY_MERGE"
    INPUT_SKIPPED = "INPUT_SKIPPED"
