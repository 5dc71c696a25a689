# nodeprov

Building blocks for a cluster node provisioner. It is plain Python with no
third-party dependencies.

## What is in the package

- `nodeprov.objects`: dataclass models for pods, nodes and their parts
  (`Pod`, `PodSpec`, `Node`, `Affinity`, `Toleration`, ...), `NamespacedName`,
  the `APIError` / `NotFoundError` exceptions, the `Reconciler` protocol, and
  the helpers `object_key`, `pod_namespaced_names` and `copy_pods`.
- `nodeprov.podutil` and `nodeprov.nodeutil`: predicates such as
  `failed_to_schedule`, `is_scheduled`, `is_preempting`, `is_terminal`,
  `is_owned_by_daemonset`, `is_owned_by_node` and `is_ready`.
- `nodeprov.resources`: quantity parsing and summing of container requests
  and limits.
- `nodeprov.eviction`: `EvictionQueue`, which evicts pods one at a time and
  retries failures with per-pod exponential backoff.
- `nodeprov.workqueue`: `BucketRateLimiter`, `ItemExponentialFailureRateLimiter`
  and `WorkQueue`, a rate-limited concurrent task runner.
- `nodeprov.options` and `nodeprov.env`: settings from flags and environment
  variables.
- `nodeprov.functional`: string-list and string-map helpers.
- `nodeprov.result`, `nodeprov.metrics`, `nodeprov.clock`, `nodeprov.pretty`,
  `nodeprov.injection`, `nodeprov.project`: reconcile results, histogram
  buckets and timers, a replaceable clock, compact JSON for logs, an
  immutable call context, and project paths.

## Options

Flags (either `-name` or `--name`) fall back to environment variables
`CLUSTER_NAME`, `CLUSTER_ENDPOINT`, `METRICS_PORT`, `HEALTH_PROBE_PORT`,
`KUBE_CLIENT_QPS`, `KUBE_CLIENT_BURST` and `AWS_NODE_NAME_CONVENTION`:

```python
from nodeprov.options import OptionsError, parse_options

try:
    opts = parse_options(["--cluster-name", "demo", "--cluster-endpoint", "https://demo.example.com"])
except OptionsError as err:
    print(err.errors)
```

A missing cluster name, an endpoint that is not an absolute URL with a host,
or a node name convention other than `ip-name` or `resource-name` raise
`OptionsError`, whose `errors` lists every problem.

## String sets

`None` stands for the universal set, an empty list for the empty set:

```python
from nodeprov.functional import intersect_string_slice, union_string_maps

intersect_string_slice(None, ["a", "b"])        # ["a", "b"]
intersect_string_slice(["a", "b", "c"], ["b"])  # ["b"]
intersect_string_slice(["a", "b"], [])          # []
union_string_maps({"a": "b"}, {"a": "y"})       # {"a": "y"}
```

## Resources

```python
from nodeprov.objects import Container, Pod, PodSpec
from nodeprov.resources import gpu_limits_for, parse_quantity, requests_for_pods

parse_quantity("1Gi")    # Decimal 1073741824
pod = Pod(spec=PodSpec(containers=[
    Container(requests={"cpu": "500m"}, limits={"nvidia.com/gpu": 1}),
]))
requests_for_pods(pod, pod)   # {"cpu": Decimal("1.000")}
gpu_limits_for(pod)           # {"nvidia.com/gpu": Decimal("1")}
```

## Evicting pods

`EvictionQueue` takes any object with an `evict(key)` method. Raising
`APIError` with code 500 or 429, or any other exception, counts as a failed
eviction and is retried later; `NotFoundError` (404) counts as done.

```python
from nodeprov.eviction import EvictionQueue

with EvictionQueue(client) as queue:
    queue.add(pods)
    queue.start()          # or call queue.process_next() yourself
    key in queue           # True while that pod awaits eviction
```

## Rate-limited work

```python
from nodeprov.workqueue import WorkQueue

with WorkQueue(qps=10, burst=5) as work:
    future = work.add(lambda: 42)
    future.result()        # 42
```

## Reconcile results and timing

```python
from datetime import timedelta
from nodeprov.result import Result, min_result
from nodeprov.metrics import duration_buckets, measure

min_result(Result(requeue_after=timedelta(seconds=5)),
           Result(requeue_after=timedelta(seconds=1)),
           Result())       # Result(requeue=True, requeue_after=1 second)

buckets = duration_buckets()   # a fresh list each call
stop = measure(histogram)      # anything with an observe(seconds) method
stop()
```

`nodeprov.clock.now()` returns the current UTC time; `clock.override(func)`
swaps the source and can be used as a context manager to restore it.

## What the package does not do

It has no client for a cluster API, no controllers that pick a provisioner
for an unschedulable pod or cordon, drain and delete nodes, and no command to
run. It provides the pieces such controllers are built from; the caller
supplies the API access (for example the object passed to `EvictionQueue`).

## Running the tests

The tests use pytest and live in `tests/`.