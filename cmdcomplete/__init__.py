"""cmdcomplete - command line autocompletion engine.

Completes free-form input against flat option lists (camelCase aware word
matching, or plain prefixes) and multi-level command grammars described as
trees of matchers. The engine is synchronous and does no I/O: callers hand
it the line being typed and get back the candidate strings.
"""
