import pytest

from names_dict.histogram import ThresholdHistogram


def test_fires_once_at_threshold():
    histogram = ThresholdHistogram(threshold=2)
    assert histogram.observe("Otto") is False
    assert histogram.observe("Otto") is True
    assert histogram.observe("Otto") is False
    assert histogram.count("Otto") == 3


def test_threshold_one_fires_on_first_occurrence():
    histogram = ThresholdHistogram(threshold=1)
    assert histogram.observe("Anna") is True
    assert histogram.observe("Anna") is False
    assert histogram.observe("Max") is True


def test_never_fires_below_threshold():
    histogram = ThresholdHistogram(threshold=3)
    fired = [histogram.observe(name) for name in ["Anna", "Max", "Anna", "Max"]]
    assert not any(fired)
    assert len(histogram) == 2


def test_keys_are_case_sensitive_by_default():
    histogram = ThresholdHistogram(threshold=2)
    assert histogram.observe("Otto") is False
    assert histogram.observe("otto") is False
    assert histogram.count("Otto") == 1
    assert histogram.count("otto") == 1
    assert len(histogram) == 2


def test_fold_case_merges_spellings():
    histogram = ThresholdHistogram(threshold=2, fold_case=True)
    assert histogram.observe("Otto") is False
    assert histogram.observe("OTTO") is True
    assert histogram.spelling("otto") == "Otto"
    assert histogram.count("oTTo") == 2
    assert len(histogram) == 1


def test_most_common():
    histogram = ThresholdHistogram(threshold=2)
    for name in ["Anna", "Max", "Max", "Anna", "Max", "Paul", "Emil", "Emil"]:
        histogram.observe(name)
    assert histogram.most_common(0) == [("Max", 3), ("Anna", 2), ("Emil", 2)]
    assert histogram.most_common(2) == [("Max", 3), ("Anna", 2)]
    assert "Paul" in histogram
    assert "Fritz" not in histogram


def test_invalid_threshold():
    with pytest.raises(ValueError):
        ThresholdHistogram(threshold=0)
