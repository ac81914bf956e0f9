"""Kafka in-sync replica check built on the kafka-topics CLI."""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import Status


class KafkaCommandError(RuntimeError):
    """Raised when kafka-topics cannot be run or fails."""


@dataclass(frozen=True)
class PartitionState:
    """Replica assignment of one topic partition."""
    topic: str
    partition: int
    leader: str
    replicas: Tuple[str, ...]
    isr: Tuple[str, ...]

    @property
    def under_replicated(self) -> bool:
        return set(self.isr) < set(self.replicas)


@dataclass(frozen=True)
class IsrResult:
    """Outcome of an ISR check."""
    status: Status
    partitions: Tuple[PartitionState, ...]
    under_replicated: Tuple[PartitionState, ...]


def _split_ids(value: str) -> Tuple[str, ...]:
    return tuple(item for item in value.split(',') if item)


def parse_describe_output(output: str) -> List[PartitionState]:
    """Parse ``kafka-topics --describe`` output.

    Fields are tab separated ``Key: value`` pairs. Topic header lines carry
    no ``Partition`` field and are ignored.

    Args:
        output: Standard output of the describe command.

    Returns:
        List of PartitionState in output order.
    """
    partitions = []
    for line in output.splitlines():
        fields = {}
        for field in line.strip().split('\t'):
            if ':' not in field:
                continue
            key, value = field.split(':', 1)
            fields[key.strip()] = value.strip()

        if 'Partition' not in fields or 'Topic' not in fields:
            continue

        try:
            partition = int(fields['Partition'])
        except ValueError:
            continue

        partitions.append(PartitionState(
            topic=fields['Topic'],
            partition=partition,
            leader=fields.get('Leader', ''),
            replicas=_split_ids(fields.get('Replicas', '')),
            isr=_split_ids(fields.get('Isr', ''))
        ))

    return partitions


class KafkaIsrChecker:
    """Reports partitions whose ISR has shrunk below the replica set."""

    def __init__(self, kafka_topics: str = 'kafka-topics.sh', bootstrap_server: Optional[str] = None,
                 zookeeper: Optional[str] = None, topic: Optional[str] = None, timeout: int = 30):
        """Initialize ISR checker.

        Args:
            kafka_topics: Path to the kafka-topics executable.
            bootstrap_server: Broker address, host:port.
            zookeeper: ZooKeeper address for older clusters, host:port.
            topic: Restrict the check to one topic.
            timeout: Seconds to wait for kafka-topics.

        Raises:
            ValueError: Unless exactly one of bootstrap_server and zookeeper is set.
        """
        if bool(bootstrap_server) == bool(zookeeper):
            raise ValueError("Exactly one of bootstrap server or zookeeper must be provided.")

        self.kafka_topics = kafka_topics
        self.bootstrap_server = bootstrap_server
        self.zookeeper = zookeeper
        self.topic = topic
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def build_command(self) -> List[str]:
        cmd = [self.kafka_topics, '--describe']
        if self.bootstrap_server:
            cmd.extend(['--bootstrap-server', self.bootstrap_server])
        else:
            cmd.extend(['--zookeeper', self.zookeeper])
        if self.topic:
            cmd.extend(['--topic', self.topic])
        return cmd

    def describe(self) -> str:
        """Run kafka-topics and return its standard output.

        Raises:
            KafkaCommandError: If the command is missing, times out or fails.
        """
        cmd = self.build_command()
        self.logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            raise KafkaCommandError(f"{self.kafka_topics} not found")
        except subprocess.TimeoutExpired:
            raise KafkaCommandError(f"{self.kafka_topics} timed out after {self.timeout}s")

        if result.returncode != 0:
            self.logger.error(f"kafka-topics failed with return code {result.returncode}: {result.stderr}")
            raise KafkaCommandError(
                f"{self.kafka_topics} exited with {result.returncode}: {result.stderr.strip()}"
            )

        return result.stdout

    def check(self) -> IsrResult:
        """Describe the topics and classify their replication state."""
        partitions = tuple(parse_describe_output(self.describe()))
        under_replicated = tuple(p for p in partitions if p.under_replicated)

        if not partitions:
            status = Status.UNKNOWN
        elif under_replicated:
            status = Status.CRITICAL
        else:
            status = Status.OK

        self.logger.info(f"{len(partitions)} partitions, {len(under_replicated)} under-replicated")
        return IsrResult(status=status, partitions=partitions, under_replicated=under_replicated)
