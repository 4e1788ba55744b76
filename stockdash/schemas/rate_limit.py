from pydantic import BaseModel


class RateLimitRecord(BaseModel):
    count: int
    reset_time: int
