from typing import Any


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type HttpHeaders = dict[str, str]

# Type aliases for cache payloads
type CacheValue = Any
type URLView = dict[str, Any]
type URLListing = dict[str, Any]
type UserStats = dict[str, Any]
