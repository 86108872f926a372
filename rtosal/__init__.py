"""RTOS-style threads, semaphores, mutexes, message queues and mailboxes."""

__version__ = "1.0.0"
__all__ = ["primitives", "queues", "demo"]