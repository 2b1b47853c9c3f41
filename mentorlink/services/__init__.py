# mentorlink/services/__init__.py
# Business logic layer. Each module takes the SQLAlchemy session as its first argument.
