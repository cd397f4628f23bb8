from datetime import date

from hamkke_hr.core.enums import LeaveStatus
from hamkke_hr.leave.model import LeaveCalendarEntry, LeaveRequest
from hamkke_hr.leave.projector import project_leave_calendar


def _req(request_id, user_id, name, start, end) -> LeaveRequest:
    return LeaveRequest(
        request_id=request_id,
        user_id=user_id,
        start_date=start,
        end_date=end,
        status=LeaveStatus.APPROVED,
        reason="vacation",
        requested_at=None,
        employee_name=name,
    )


def test_span_across_month_boundary():
    days = project_leave_calendar([_req(1, 2, "Kim", date(2025, 1, 30), date(2025, 2, 2))])

    assert list(days) == ["2025-01-30", "2025-01-31", "2025-02-01", "2025-02-02"]
    assert all(entries == [LeaveCalendarEntry(user_id=2, name="Kim")] for entries in days.values())


def test_overlapping_requests_keep_input_order():
    days = project_leave_calendar(
        [
            _req(1, 3, "Lee", date(2025, 3, 3), date(2025, 3, 4)),
            _req(2, 2, "Kim", date(2025, 3, 4), date(2025, 3, 4)),
        ]
    )

    assert [e.name for e in days["2025-03-04"]] == ["Lee", "Kim"]
    assert [e.name for e in days["2025-03-03"]] == ["Lee"]


def test_missing_name_falls_back_to_user_id():
    days = project_leave_calendar([_req(1, 9, None, date(2025, 3, 3), date(2025, 3, 3))])
    assert days["2025-03-03"][0].name == "9"


def test_reversed_span_projects_nothing():
    assert project_leave_calendar([_req(1, 2, "Kim", date(2025, 3, 4), date(2025, 3, 3))]) == {}


def test_no_requests():
    assert project_leave_calendar([]) == {}
