from pydantic import Field, model_validator

from statusboard.schemas.base import CamelModel


class DailyUptime(CamelModel):
    date: str  # YYYY-MM-DD (UTC)
    checks: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    uptime: float = 100.0

    @model_validator(mode="after")
    def _failures_within_checks(self):
        if self.failures > self.checks:
            raise ValueError("failures cannot exceed checks")
        return self

    @classmethod
    def from_counts(cls, date: str, checks: int = 0, failures: int = 0) -> "DailyUptime":
        uptime = 100.0 if checks == 0 else (checks - failures) / checks * 100
        return cls(date=date, checks=checks, failures=failures, uptime=uptime)


class UptimeResponse(CamelModel):
    days: list[DailyUptime]
    total_uptime: float
    period: int
