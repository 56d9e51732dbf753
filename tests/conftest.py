"""Pytest configuration and shared fixtures for mermaidflow tests."""

import pytest

from mermaidflow import DiagramGenerator, DiagramLayoutEngine, LayoutConfig, Parser


@pytest.fixture
def simple_flowchart():
    """Two-node top-down flowchart."""
    return """
    flowchart TD
    A-->B
    """


@pytest.fixture
def diamond_flowchart():
    """Diamond-shaped dependency graph."""
    return """
    flowchart TD
    A-->B
    A-->C
    B-->D
    C-->D
    """


@pytest.fixture
def cyclic_flowchart():
    """Flowchart with a cycle."""
    return """
    flowchart TD
    A --> B
    B --> C
    C --> A
    """


@pytest.fixture
def styled_flowchart():
    """Flowchart using shapes, labels, subgraphs and styles."""
    return """
    flowchart LR
    %% build pipeline
    subgraph ci [Continuous Integration]
    A([Commit]) --> B{Tests pass?}
    end
    B -->|yes| C[Deploy]
    B -.->|no| D((Fix))
    D ==> A
    classDef danger fill:#f96,stroke:#333,stroke-width:4px,color:#fff
    class D danger
    style C fill:#9f9
    """


@pytest.fixture
def sequence_input():
    """Sequence diagram with declared and implicit participants."""
    return """
    sequenceDiagram
    participant A as Alice
    actor B as Bob
    A->>B: Hello Bob
    B-->>A: Hi Alice
    A-)C: Fire and forget
    C--xA: Rejected
    """


@pytest.fixture
def pie_input():
    """Pie chart with a title."""
    return """
    pie title Pets adopted
    "Dogs" : 386
    "Cats" : 85.5
    "Rats" : 15
    """


@pytest.fixture
def class_input():
    """Class diagram with blocks, annotations and relations."""
    return """
    classDiagram
    class Animal {
        <<abstract>>
        +String name
        -int age
        +makeSound() void
    }
    class Duck
    Animal <|-- Duck
    Animal "1" *-- "many" Leg : has
    Duck : +swim()
    """


@pytest.fixture
def state_input():
    """State diagram with start and end pseudo-states."""
    return """
    stateDiagram-v2
    [*] --> Still
    Still --> Moving : push
    Moving --> Still
    Moving --> Crash
    Crash --> [*]
    """


@pytest.fixture
def gantt_input():
    """Gantt chart with two sections and mixed task flags."""
    return """
    gantt
    title A Gantt Diagram
    dateFormat YYYY-MM-DD
    section Design
    Research :done, des1, 2024-01-06, 2024-01-08
    Mockups :active, des2, 2024-01-09, 3d
    section Build
    Backend :crit, after des2, 5d
    Frontend : 20d
    """


@pytest.fixture
def er_input():
    """ER diagram with attribute blocks and cardinality relations."""
    return """
    erDiagram
    CUSTOMER ||--o{ ORDER : places
    ORDER ||--|{ LINE-ITEM : contains
    CUSTOMER {
        string name
        string custNumber PK
    }
    ORDER {
        int orderNumber PK
        string customer FK "buyer id"
    }
    """


@pytest.fixture
def all_diagram_inputs(
    simple_flowchart,
    sequence_input,
    pie_input,
    class_input,
    state_input,
    gantt_input,
    er_input,
):
    """One input per diagram kind."""
    return [
        simple_flowchart,
        sequence_input,
        pie_input,
        class_input,
        state_input,
        gantt_input,
        er_input,
    ]


@pytest.fixture
def parser():
    """Default Parser instance."""
    return Parser()


@pytest.fixture
def config():
    """Default layout configuration."""
    return LayoutConfig()


@pytest.fixture
def engine(config):
    """Layout engine with the default configuration."""
    return DiagramLayoutEngine(config)


@pytest.fixture
def generator():
    """Default DiagramGenerator instance."""
    return DiagramGenerator()
