"""Feature modules of the cheat risk analyzer."""
