import enum


class BudgetRange(str, enum.Enum):
    RANGE_1_10K = "range1_10kNOK"
    RANGE_10_50K = "range10_50kNOK"
    RANGE_50_100K = "range50_100kNOK"
    RANGE_100K_PLUS = "range100kPlusNOK"

    @property
    def label(self):
        return BUDGET_LABELS[self]


BUDGET_LABELS = {
    BudgetRange.RANGE_1_10K: "1 000 – 10 000 NOK",
    BudgetRange.RANGE_10_50K: "10 000 – 50 000 NOK",
    BudgetRange.RANGE_50_100K: "50 000 – 100 000 NOK",
    BudgetRange.RANGE_100K_PLUS: "100 000 NOK +",
}


class ProjectStatus(str, enum.Enum):
    NEW = "new"
    REVIEWED = "reviewed"
    FOLLOWUP = "followup"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"

    @property
    def label(self):
        return STATUS_LABELS[self]

    @classmethod
    def decode(cls, raw):
        """Normalize any wire shape of a status into a ProjectStatus.

        Accepts a member, a plain tag ("inProgress"), a variant wrapper
        ({"inProgress": null}) or a tagged object ({"__kind__": "inProgress"}).
        Raises ValueError for anything else.
        """
        if isinstance(raw, cls):
            return raw
        tag = raw
        if isinstance(raw, dict):
            if "__kind__" in raw:
                tag = raw["__kind__"]
            elif len(raw) == 1:
                tag = next(iter(raw))
            else:
                raise ValueError(f"Unrecognised status value: {raw!r}")
        if not isinstance(tag, str):
            raise ValueError(f"Unrecognised status value: {raw!r}")
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(f"Unrecognised status value: {raw!r}") from None


STATUS_LABELS = {
    ProjectStatus.NEW: "Ny",
    ProjectStatus.REVIEWED: "Gjennomgått",
    ProjectStatus.FOLLOWUP: "Trenger oppfølging",
    ProjectStatus.IN_PROGRESS: "Under arbeid",
    ProjectStatus.COMPLETED: "Fullført",
}

# every state except the initial one can be set by an admin, from any state
TRANSITION_TARGETS = frozenset(s for s in ProjectStatus if s is not ProjectStatus.NEW)


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"
