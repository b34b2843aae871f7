"""
Scheduling core.

Components (leaves first):
- models.py: priorities, InitializationState, lifecycle enums
- errors.py: the error taxonomy raised during resolution
- ports.py: Initializer / InitEventsObserver protocols
- registry.py: immutable, ordered initializer registry
- resolver.py: dependency resolution with cycle/missing detection
- phase.py: sequential execution of one priority class
- state_store.py: observable phase states and the derived composite
"""
