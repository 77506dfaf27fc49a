"""Authentication.

Learn: Users authenticate with email/password and receive two JWTs,
delivered as http-only cookies:
1. access_token → short-lived (15 min), sent on every API call
2. refresh_token → long-lived (7 days), only used to mint new access tokens

Every request re-resolves its caller from the access token into an
AuthContext (anonymous or authenticated). Ownership checks live in
tasktrack.authz.
"""
