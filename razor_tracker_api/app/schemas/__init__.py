"""
Pydantic schema definitions for entities and API payloads.

Each entity (razors, blades, usage records) defines a ``*Create`` and
``*Update`` request shape and a ``*Read`` shape.  The ``*Read`` models
double as the entity values handed between the services and the
storage backends.
"""
