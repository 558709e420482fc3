"""Built-in course reference data.

Courses defined here take precedence over user-stored course documents.
"""

from typing import Dict, Optional

from models import Course, CourseHole

HINOKUMA_COUNTRY_CLUB_NAME = "日ノ隈カントリークラブ"

# (hole, par, back tee yards, regular tee yards)
_HINOKUMA_HOLES = [
    (1, 4, 305, 286),
    (2, 5, 485, 467),
    (3, 5, 504, 482),
    (4, 4, 400, 375),
    (5, 3, 190, 183),
    (6, 4, 368, 352),
    (7, 4, 350, 330),
    (8, 3, 176, 154),
    (9, 4, 408, 380),
    (10, 4, 368, 335),
    (11, 5, 480, 441),
    (12, 3, 164, 137),
    (13, 4, 300, 250),
    (14, 4, 401, 380),
    (15, 4, 380, 351),
    (16, 5, 472, 427),
    (17, 3, 135, 121),
    (18, 4, 363, 349),
]

hinokuma_country_club = Course(
    name=HINOKUMA_COUNTRY_CLUB_NAME,
    holes=[
        CourseHole(number=n, par=par, back_tee=back, regular_tee=regular)
        for n, par, back, regular in _HINOKUMA_HOLES
    ],
)

COURSES: Dict[str, Course] = {
    hinokuma_country_club.name: hinokuma_country_club,
}


def lookup(course_name: str) -> Optional[Course]:
    """Get a built-in course by exact name."""
    return COURSES.get(course_name)
