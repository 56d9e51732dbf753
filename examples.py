#!/usr/bin/env python3
"""
Examples of using the diagram generator.

Run this file to generate one example PNG per diagram kind.
"""

from mermaidflow import DiagramGenerator


def example_flowchart(generator):
    """Release pipeline with shapes, a subgraph and a retry loop"""
    print("Example 1: Flowchart")

    input_text = """
    flowchart TD
    subgraph ci [Continuous Integration]
    A([Push]) --> B[Build]
    B --> C{Tests pass?}
    end
    C -->|yes| D[Deploy]
    C -.->|no| E((Fix))
    E ==> A
    classDef warn fill:#f96,stroke:#333,color:#fff
    class E warn
    """

    generator.save_png(input_text, "example_flowchart.png")
    print("  Saved: example_flowchart.png\n")


def example_sequence(generator):
    """Login handshake"""
    print("Example 2: Sequence Diagram")

    input_text = """
    sequenceDiagram
    actor U as User
    participant W as Web
    participant A as Auth
    U->>W: Open dashboard
    W->>A: Validate session
    A-->>W: Expired
    W-xU: Redirect to login
    W->>W: Clear cache
    """

    generator.save_png(input_text, "example_sequence.png")
    print("  Saved: example_sequence.png\n")


def example_pie(generator):
    """Traffic sources"""
    print("Example 3: Pie Chart")

    input_text = """
    pie showData title Traffic sources
    "Search" : 52
    "Direct" : 27
    "Social" : 14
    "Email" : 7
    """

    generator.save_png(input_text, "example_pie.png")
    print("  Saved: example_pie.png\n")


def example_class(generator):
    """Small shape hierarchy"""
    print("Example 4: Class Diagram")

    input_text = """
    classDiagram
    class Shape {
        <<interface>>
        +area() float
        +perimeter() float
    }
    class Circle {
        -float radius
        +area() float
    }
    class Canvas {
        +List~Shape~ shapes
        +draw() void
    }
    Shape <|.. Circle
    Canvas "1" o-- "many" Shape : holds
    """

    generator.save_png(input_text, "example_class.png")
    print("  Saved: example_class.png\n")


def example_state(generator):
    """Order lifecycle"""
    print("Example 5: State Diagram")

    input_text = """
    stateDiagram-v2
    [*] --> Pending
    Pending --> Paid : payment received
    Paid --> Shipped
    Pending --> Cancelled : timeout
    Shipped --> [*]
    Cancelled --> [*]
    """

    generator.save_png(input_text, "example_state.png")
    print("  Saved: example_state.png\n")


def example_gantt(generator):
    """Two-phase release plan"""
    print("Example 6: Gantt Chart")

    input_text = """
    gantt
    title Release plan
    dateFormat YYYY-MM-DD
    section Design
    Requirements :done, req, 2024-03-01, 5d
    Mockups :active, mock, after req, 4d
    section Build
    API :crit, api, after mock, 10d
    Frontend : 8d
    """

    generator.save_png(input_text, "example_gantt.png")
    print("  Saved: example_gantt.png\n")


def example_er(generator):
    """Shop schema"""
    print("Example 7: ER Diagram")

    input_text = """
    erDiagram
    CUSTOMER ||--o{ ORDER : places
    ORDER ||--|{ LINE-ITEM : contains
    PRODUCT ||--o{ LINE-ITEM : "ordered in"
    CUSTOMER {
        string email PK
        string name
    }
    ORDER {
        int id PK
        string customer FK "placed by"
    }
    """

    generator.save_png(input_text, "example_er.png")
    print("  Saved: example_er.png\n")


def main():
    """Run all examples."""
    print("=" * 50)
    print("Diagram Generator Examples")
    print("=" * 50)
    print()

    generator = DiagramGenerator()
    example_flowchart(generator)
    example_sequence(generator)
    example_pie(generator)
    example_class(generator)
    example_state(generator)
    example_gantt(generator)
    example_er(generator)

    print("=" * 50)
    print("All examples generated!")
    print("=" * 50)


if __name__ == "__main__":
    main()
