"""Built-in CLI sub-command groups for authacquire.

* :mod:`~authacquire.commands.profiles` -- create, list, show and delete
  profiles.

Single commands (``token``, ``check``, ``types``) live in
:mod:`authacquire.app`.
"""
