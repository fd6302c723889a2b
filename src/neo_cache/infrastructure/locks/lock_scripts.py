"""Lua scripts for single-node locks.

Each script covers every resource of a lock atomically on one node.
KEYS are the resources, ARGV[1] the lease value, ARGV[2] the duration in ms.
"""

ACQUIRE_SCRIPT = """
for _, key in ipairs(KEYS) do
  if redis.call("exists", key) == 1 then
    return 0
  end
end
for _, key in ipairs(KEYS) do
  redis.call("set", key, ARGV[1], "PX", ARGV[2])
end
return #KEYS
"""

EXTEND_SCRIPT = """
for _, key in ipairs(KEYS) do
  if redis.call("get", key) ~= ARGV[1] then
    return 0
  end
end
for _, key in ipairs(KEYS) do
  redis.call("set", key, ARGV[1], "PX", ARGV[2])
end
return #KEYS
"""

RELEASE_SCRIPT = """
local count = 0
for _, key in ipairs(KEYS) do
  if redis.call("get", key) == ARGV[1] then
    redis.pcall("del", key)
    count = count + 1
  end
end
return count
"""
