from names_dict.dedupe import LineDeduper


def test_admits_each_line_once():
    deduper = LineDeduper()
    assert deduper.admit("otto") is True
    assert deduper.admit("OTTO") is True
    assert deduper.admit("otto") is False
    assert len(deduper) == 2
