import math
from dataclasses import dataclass

from media_transcriber.errors import PlanningError


@dataclass(frozen=True)
class SegmentDescriptor:
    index: int
    start_seconds: float
    length_seconds: float

    @property
    def end_seconds(self) -> float:
        return self.start_seconds + self.length_seconds


def plan_segments(total_duration: float, max_chunk_duration: float) -> list[SegmentDescriptor]:
    """
    Split [0, total_duration) into contiguous segments of at most max_chunk_duration.

    Every segment but the last is exactly max_chunk_duration long; the last
    one covers whatever remains.

    Args:
        total_duration: Length of the media in seconds
        max_chunk_duration: Upper bound for each segment in seconds

    Returns:
        The segments ordered by index, starting at 0
    """
    if total_duration <= 0:
        raise PlanningError(f"Cannot plan segments for a duration of {total_duration} seconds")
    if max_chunk_duration <= 0:
        raise PlanningError(f"Chunk duration must be positive, got {max_chunk_duration}")

    num_chunks = math.ceil(total_duration / max_chunk_duration)
    segments = []
    for i in range(num_chunks):
        start = i * max_chunk_duration
        length = min(max_chunk_duration, total_duration - start)
        if length <= 0:
            # ceil() can overshoot by one when the division lands a hair above an integer
            break
        segments.append(SegmentDescriptor(index=i, start_seconds=start, length_seconds=length))
    return segments
