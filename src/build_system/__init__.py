"""Build orchestration for Maven and Gradle applications.

Drives a project-local build wrapper, locates the artifact it produced,
materializes it into the application layer and replaces the source tree.
"""

__version__ = "0.1.0"
