"""Allow ``python -m course_slides``."""

from course_slides.cli import main

main()
