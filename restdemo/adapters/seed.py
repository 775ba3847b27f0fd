"""
Demo data seeder - Populates an empty to-do store on startup.

Runs only when SEED_DEMO_DATA is enabled. An already populated store is
left untouched, so restarting against a persistent database never
duplicates the demo items.
"""

import logging
import random
from datetime import date, timedelta

from restdemo.domain.ports import Todo, TodoRepository

logger = logging.getLogger(__name__)

DEMO_TODOS = (
    ("Buy groceries", "Milk, eggs, bread, and fruits"),
    ("Workout", "1 hour gym session"),
    ("Read book", "Finish chapter 5 of 'Fluent Python'"),
    ("Call Mom", "Check in and see how she's doing"),
    ("Pay bills", "Electricity and internet bills due this week"),
    ("Plan weekend trip", "Research destinations and accommodations"),
    ("Clean the house", "Vacuum and dust all rooms"),
    ("Finish project report", "Complete the final draft for submission"),
    ("Attend yoga class", "Evening session at 6 PM"),
    ("Organize workspace", "Declutter desk and arrange files"),
    ("Go for a walk", "30 minutes in the park"),
    ("Bake cake", "Try new chocolate cake recipe"),
)

ASSIGNEE_IDS = (101, 102, 103, 104, 105, 106)


class DemoDataSeeder:
    """
    Seeds up to len(DEMO_TODOS) demo to-dos with random due dates and assignees.

    Due dates fall 1-30 days after today. The random source is
    injectable for deterministic tests.
    """

    def __init__(
        self,
        repository: TodoRepository,
        count: int = len(DEMO_TODOS),
        rng: random.Random | None = None,
    ) -> None:
        self._repository = repository
        self._count = count
        self._rng = rng or random.Random()

    def seed(self, today: date | None = None) -> int:
        """
        Insert demo to-dos if the store is empty.

        Returns:
            Number of to-dos inserted (0 when the store was not empty)
        """
        if self._repository.count() > 0:
            logger.info("Todos already exist, skipping seeding.")
            return 0

        today = today or date.today()
        count = max(1, min(self._count, len(DEMO_TODOS)))
        logger.info("Seeding %d demo todos...", count)

        for title, description in DEMO_TODOS[:count]:
            due_date = today + timedelta(days=self._rng.randint(1, 30))
            assignee = self._rng.choice(ASSIGNEE_IDS)
            self._repository.save(
                Todo(
                    title=title,
                    description=description,
                    due_date=due_date,
                    assigned_user_id=assignee,
                )
            )
            logger.debug("Inserted demo todo: %s, due %s, assigned to %s", title, due_date, assignee)

        logger.info("Seeding complete. Created %d demo todos.", count)
        return count
