"""Core del editor: modelo, store, máquina de estados y settings (sin Qt)."""
