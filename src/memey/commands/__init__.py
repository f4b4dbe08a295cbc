"""Built-in CLI commands for memey.

Each module exports a plain callback registered directly on the root app:

* :mod:`~memey.commands.create` -- resolve a template and caption it
  (the default command).
* :mod:`~memey.commands.update` -- merge the remote template catalog.
* :mod:`~memey.commands.login` -- store Imgflip credentials.
* :mod:`~memey.commands.stats` -- count known templates and expressions.
"""
