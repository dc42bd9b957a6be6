"""
Core domain models, fixed-point primitives, contracts and errors.

Модуль не зависит от внешних коллабораторов (history provider, auction oracle,
counter store, access control).
"""
