"""Design Request Translator: Slack bot for bilingual design request cards.

WHY: Korean and English speaking team members file design requests in the
same Slack channel. Each request is a loosely formatted form (team name,
design requests, image requests) that the other side cannot read. This
package detects those forms, translates them line by line, and posts a
tracked card back into the thread.

HOW: Three-stage pipeline: parse (core.parser), translate (core.translate
backed by api.client), render (slack.messages). Status buttons on the card
are handled by slack.card, which rewrites the card in place.

RULES:
- The card posted in Slack is the only persistent state
- Every handler reconstructs what it needs from the incoming payload
- Fixed colour terms and {literal} spans never reach the model unprotected
"""

__version__ = "0.1.0"
