from antiques_trail import main as cli


class FakeService:
    def __init__(self, summary=None, results=None):
        self.summary = summary
        self.results = results or {}
        self.migrated = []

    def get_hours_summary(self, place_id, now=None):
        return self.summary

    def migrate_legacy(self, place_id, dry_run=False):
        self.migrated.append((place_id, dry_run))
        return self.results.get(place_id)


def test_parse_command_prints_week_and_skipped(capsys):
    assert cli.main(["parse", "Mon-Fri: 9am-5pm, Sat: by appointment, whenever"]) == 0
    out = capsys.readouterr().out
    assert "Sunday: Closed" in out
    assert "Monday: 9:00 - 17:00" in out
    assert "Saturday: By appointment only" in out
    assert "Skipped: 'whenever' (no day prefix)" in out


def test_hours_summary_output(capsys):
    service = FakeService(summary={
        "formatted": [{"dayText": "Monday to Saturday", "hours": "10:00 - 17:00"},
                      {"dayText": "Sunday", "hours": "Closed"}],
        "status": {"isOpen": True, "closingSoon": True, "byAppointment": False},
    })
    assert cli.print_hours_summary(service, 1) == 0
    out = capsys.readouterr().out
    assert "Monday to Saturday: 10:00 - 17:00" in out
    assert "Now: Open, closing soon" in out


def test_hours_summary_without_hours(capsys):
    service = FakeService(summary={"formatted": [], "status": {}})
    assert cli.print_hours_summary(service, 9) == 1
    assert "No opening hours configured for place 9" in capsys.readouterr().out


def test_migrate_legacy_passes_dry_run():
    service = FakeService()
    assert cli.migrate_legacy(service, [1, 2], dry_run=True) == 0
    assert service.migrated == [(1, True), (2, True)]
