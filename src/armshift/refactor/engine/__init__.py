from .planner import FileFailure, MigrationPlan, Planner, migrate_source

__all__ = ["FileFailure", "MigrationPlan", "Planner", "migrate_source"]
