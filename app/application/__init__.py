"""
Application layer package.

One use case class per operation, each with an ``execute`` method.
Use cases validate input, call domain services and talk to storage
through domain ports only.
"""
