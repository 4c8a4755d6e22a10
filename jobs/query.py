# jobs/query.py
from dataclasses import dataclass

from django.db.models import Q

from core.constants import JOB_SORT_CHOICES, JOB_SORT_NEWEST, JOB_SORT_RATE_HIGH, JOB_SORT_RATE_LOW
from core.exceptions import ValidationError
from core.query import check_pagination, fold_case, paginate, text_contains

ALL_SKILLS = ('', 'all', 'any')

ORDERINGS = {
    JOB_SORT_NEWEST: ('-created_at', 'id'),
    JOB_SORT_RATE_HIGH: ('-hourly_rate_max', '-created_at', 'id'),
    JOB_SORT_RATE_LOW: ('hourly_rate_min', '-created_at', 'id'),
}


@dataclass(frozen=True)
class JobQuery:
    search: str = ''
    skill: str | None = None
    sort: str = JOB_SORT_NEWEST
    limit: int | None = None
    offset: int | None = None
    active_only: bool = True
    employer_id: str | None = None

    def matches(self, job):
        if self.active_only and not job.is_active:
            return False
        if self.employer_id is not None and job.employer_id != self.employer_id:
            return False
        if self.search:
            needle = fold_case(self.search)
            if needle not in fold_case(job.title) and needle not in fold_case(job.description):
                return False
        if self.skill and self.skill not in job.skills:
            return False
        return True

    def apply(self, jobs):
        """Filter, sort and paginate jobs given in insertion order."""
        matched = [job for job in jobs if self.matches(job)]
        # Stable sorts: the last key applied is the primary one.
        matched.sort(key=lambda job: job.created_at, reverse=True)
        if self.sort == JOB_SORT_RATE_HIGH:
            matched.sort(key=lambda job: job.hourly_rate_max, reverse=True)
        elif self.sort == JOB_SORT_RATE_LOW:
            matched.sort(key=lambda job: job.hourly_rate_min)
        return paginate(matched, self.limit, self.offset)

    def as_q(self):
        q = Q()
        if self.active_only:
            q &= Q(is_active=True)
        if self.employer_id is not None:
            q &= Q(employer_id=self.employer_id)
        if self.search:
            q &= text_contains('title', self.search) | text_contains('description', self.search)
        if self.skill:
            q &= Q(skills__name=self.skill)
        return q

    @property
    def ordering(self):
        return ORDERINGS[self.sort]


def build_job_query(search='', skill=None, sort=JOB_SORT_NEWEST, limit=None, offset=None,
                    active_only=True, employer_id=None):
    check_pagination(limit, offset)
    sort = sort or JOB_SORT_NEWEST
    if sort not in dict(JOB_SORT_CHOICES):
        raise ValidationError(errors={'sort': f"Unknown sort order '{sort}'."})
    if skill is not None and skill.lower() in ALL_SKILLS:
        skill = None
    return JobQuery(
        search=(search or '').strip(),
        skill=skill,
        sort=sort,
        limit=limit,
        offset=offset,
        active_only=active_only,
        employer_id=employer_id,
    )
