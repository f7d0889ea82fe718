# Smallest cascading-cut threshold that keeps the amortized bounds
MIN_CUT_THRESHOLD = 2

# Classical Fibonacci heap: cut an ancestor on its second lost child
DEFAULT_CUT_THRESHOLD = 2

# Extra rank slots above floor(log2(size)) during consolidation
RANK_SLACK = 5

DEFAULT_WORKLOAD_OPS = 10000
DEFAULT_WORKLOAD_SEED = 0
DEFAULT_MAX_KEY = 1 << 20
