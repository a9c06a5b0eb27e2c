"""
Jobs - Day jobs available on the shared job market.

Each job id exists once in the job deck; holding a job removes it from the
market until the holder quits or is fired.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Job:
    """
    A day job. Going to work applies the deltas once per turn.

    time_delta applies to the remaining Time this turn (usually negative,
    the Student job gives Time back).
    """
    job_id: str
    name: str
    money_delta: int = 0
    inspiration_delta: int = 0
    food_delta: int = 0
    time_delta: int = 0


JOBS: list[Job] = [
    Job("job_teacher", "Teacher", money_delta=1, inspiration_delta=2, time_delta=-2),
    Job("job_programmer", "Programmer", money_delta=2, inspiration_delta=-1, time_delta=-1),
    Job("job_admin", "Admin", money_delta=1, inspiration_delta=-2, food_delta=1),
    Job("job_student", "Student", money_delta=-1, food_delta=1, time_delta=2),
    Job("job_drug_dealer", "Drug Dealer", money_delta=3, inspiration_delta=1, time_delta=-3),
    Job("job_volunteer", "Volunteer", money_delta=-2, inspiration_delta=3, food_delta=1),
]

JOB_IDS: list[str] = [job.job_id for job in JOBS]

_JOBS_BY_ID = {job.job_id: job for job in JOBS}


def get_job(job_id: str | None) -> Job | None:
    """Look up a job by id."""
    if not job_id:
        return None
    return _JOBS_BY_ID.get(job_id)
