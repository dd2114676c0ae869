import redis
from redis.exceptions import RedisError

def make_redis(url: str) -> redis.Redis:
    # connects lazily; nothing touches the network until the first command
    return redis.Redis.from_url(url, decode_responses=True)

# redis connectivity check
def redis_ping(client: redis.Redis) -> bool:
    try:
        return bool(client.ping())
    except RedisError:
        return False
