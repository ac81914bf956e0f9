import subprocess

import pytest

from jobs_monitor.cli import run_kafka_isr
from jobs_monitor.core.kafka_isr import (KafkaCommandError, KafkaIsrChecker,
                                         parse_describe_output)
from jobs_monitor.core.models import Status
from jobs_monitor.utils.formatters import format_isr_line

DESCRIBE_HEALTHY = (
    "Topic: jobs\tTopicId: abc\tPartitionCount: 2\tReplicationFactor: 3\tConfigs: \n"
    "\tTopic: jobs\tPartition: 0\tLeader: 1\tReplicas: 1,2,3\tIsr: 1,2,3\n"
    "\tTopic: jobs\tPartition: 1\tLeader: 2\tReplicas: 2,3,1\tIsr: 2,3,1\n"
)

DESCRIBE_DEGRADED = (
    "Topic:jobs\tPartitionCount:2\tReplicationFactor:3\tConfigs:\n"
    "\tTopic: jobs\tPartition: 0\tLeader: 1\tReplicas: 1,2,3\tIsr: 1,2\n"
    "\tTopic: jobs\tPartition: 1\tLeader: none\tReplicas: 2,3,1\tIsr: \n"
    "\tTopic: jobs\tPartition: 2\tLeader: 3\tReplicas: 3,1,2\tIsr: 3,2,1\n"
)


def completed(stdout='', returncode=0, stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_run(monkeypatch):
    calls = []

    def install(result):
        def _run(cmd, **kwargs):
            calls.append(cmd)
            if isinstance(result, Exception):
                raise result
            return result
        monkeypatch.setattr(subprocess, 'run', _run)
        return calls

    return install


def test_parse_describe_output():
    partitions = parse_describe_output(DESCRIBE_DEGRADED)

    assert [(p.topic, p.partition) for p in partitions] == [('jobs', 0), ('jobs', 1), ('jobs', 2)]
    assert partitions[0].replicas == ('1', '2', '3')
    assert partitions[0].isr == ('1', '2')
    assert partitions[1].isr == ()
    assert [p.under_replicated for p in partitions] == [True, True, False]


def test_requires_exactly_one_endpoint():
    with pytest.raises(ValueError):
        KafkaIsrChecker()
    with pytest.raises(ValueError):
        KafkaIsrChecker(bootstrap_server='b:9092', zookeeper='z:2181')


def test_build_command():
    checker = KafkaIsrChecker(kafka_topics='/opt/kafka/bin/kafka-topics.sh',
                              zookeeper='zk:2181', topic='jobs')

    assert checker.build_command() == ['/opt/kafka/bin/kafka-topics.sh', '--describe',
                                       '--zookeeper', 'zk:2181', '--topic', 'jobs']


def test_healthy_cluster(fake_run):
    calls = fake_run(completed(DESCRIBE_HEALTHY))

    result = KafkaIsrChecker(bootstrap_server='broker:9092').check()

    assert calls == [['kafka-topics.sh', '--describe', '--bootstrap-server', 'broker:9092']]
    assert result.status == Status.OK
    assert format_isr_line(result) == ("OK (2 partitions checked, 0 under-replicated)"
                                       " | under_replicated=0 partitions=2")


def test_under_replicated(fake_run):
    fake_run(completed(DESCRIBE_DEGRADED))

    result = KafkaIsrChecker(bootstrap_server='broker:9092').check()

    assert result.status == Status.CRITICAL
    assert format_isr_line(result) == (
        "CRITICAL: jobs:0 isr 1,2/1,2,3 jobs:1 isr /2,3,1 "
        "(3 partitions checked, 2 under-replicated) | under_replicated=2 partitions=3"
    )


def test_no_partitions_is_unknown(fake_run):
    fake_run(completed(''))

    assert KafkaIsrChecker(bootstrap_server='broker:9092').check().status == Status.UNKNOWN


@pytest.mark.parametrize('outcome', [
    FileNotFoundError(),
    subprocess.TimeoutExpired(cmd='kafka-topics.sh', timeout=30),
    completed(returncode=1, stderr='connection refused'),
])
def test_command_failures(fake_run, outcome):
    fake_run(outcome)

    with pytest.raises(KafkaCommandError):
        KafkaIsrChecker(bootstrap_server='broker:9092').describe()


def test_cli_critical(fake_run, capsys):
    fake_run(completed(DESCRIBE_DEGRADED))

    assert run_kafka_isr(['-b', 'broker:9092']) == 2
    assert capsys.readouterr().out.startswith("CRITICAL: jobs:0 isr 1,2/1,2,3")


def test_cli_verbose_lists_all(fake_run, capsys):
    fake_run(completed(DESCRIBE_HEALTHY))

    assert run_kafka_isr(['-b', 'broker:9092', '-V']) == 0
    assert capsys.readouterr().out.startswith("OK: jobs:0 isr 1,2,3/1,2,3 jobs:1 isr 2,3,1/2,3,1")


def test_cli_command_failure_is_unknown(fake_run, capsys):
    fake_run(completed(returncode=1, stderr='boom'))

    assert run_kafka_isr(['-b', 'broker:9092']) == 3
    assert capsys.readouterr().out.startswith("UNKNOWN: kafka-topics.sh exited with 1: boom")


def test_cli_missing_endpoint(capsys):
    assert run_kafka_isr(['-T', 'jobs']) == 3
    assert capsys.readouterr().out == \
        "UNKNOWN: Exactly one of bootstrap server or zookeeper must be provided.\n"
