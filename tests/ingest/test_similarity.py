from src.attendance_import.attendance_import.ingest.similarity import jaccard_similarity


def test_overlap_ratio():
    assert jaccard_similarity({"jane", "mary", "doe"}, {"jane", "mary", "doe", "smith"}) == 0.75


def test_symmetric():
    a, b = ["jane", "doe"], ["jane", "doe2"]
    assert jaccard_similarity(a, b) == jaccard_similarity(b, a)


def test_identical_sets_score_one():
    assert jaccard_similarity(["jane", "doe"], ["doe", "jane"]) == 1.0


def test_empty_sets_score_zero():
    assert jaccard_similarity([], []) == 0.0
    assert jaccard_similarity(["jane"], []) == 0.0


def test_duplicate_tokens_collapse():
    assert jaccard_similarity(["a", "a", "b"], ["a", "b"]) == 1.0


def test_disjoint_sets_score_zero():
    assert jaccard_similarity(["jon", "doee"], ["jane", "doe"]) == 0.0
