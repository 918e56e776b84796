# claude_cmd/templates.py
"""Static content: tool lists, security profiles, sub-agent and CLAUDE.md templates."""
from dataclasses import dataclass, field

AVAILABLE_TOOLS = [
    "Read",
    "Edit",
    "MultiEdit",
    "Write",
    "Grep",
    "Glob",
    "Bash",
    "LS",
    "Task",
    "WebFetch",
    "WebSearch",
    "TodoWrite",
    "NotebookRead",
    "NotebookEdit",
]

DEFAULT_SUB_AGENT_TOOLS = ["Read", "Edit", "Grep", "Glob", "Bash", "Write"]

# Command-only tool names mapped onto the closest sub-agent tool
COMMAND_TOOL_MAPPINGS = {
    "mcp__puppeteer__puppeteer_navigate": "WebFetch",
    "mcp__puppeteer__puppeteer_screenshot": "Bash",
    "mcp__puppeteer__puppeteer_click": "Bash",
    "mcp__puppeteer__puppeteer_fill": "Bash",
    "mcp__puppeteer__puppeteer_select": "Bash",
    "mcp__puppeteer__puppeteer_hover": "Bash",
    "mcp__puppeteer__puppeteer_evaluate": "Bash",
}

SECURITY_PROFILES = {
    "strict": [],
    "moderate": [
        "Edit",
        "Bash(git status)",
        "Bash(git diff)",
        "Bash(npm test)",
        "Bash(npm run build)",
    ],
    "permissive": [
        "Edit",
        "Bash(git *)",
        "Bash(npm *)",
        "Bash(yarn *)",
        "Bash(python *)",
        "Bash(node *)",
    ],
}

SUB_AGENT_NAME_PATTERN = r"^[a-zA-Z0-9_-]+$"


@dataclass
class SubAgentTemplate:
    name: str
    description: str
    system_prompt: str
    category: str
    default_tools: list[str] = field(default_factory=list)


SUB_AGENT_TEMPLATES = [
    SubAgentTemplate(
        name="code-reviewer",
        description="Expert code review specialist focusing on best practices and security",
        default_tools=["Read", "Grep", "Glob", "LS"],
        category="development",
        system_prompt="""You are a senior code reviewer with expertise in multiple programming languages and frameworks.

Your role is to:
- Review code for bugs, security vulnerabilities, and performance issues
- Suggest improvements following best practices and coding standards
- Identify potential architectural concerns
- Provide constructive feedback with clear explanations

Focus on being thorough but constructive in your reviews.""",
    ),
    SubAgentTemplate(
        name="debugger",
        description="Specialized debugging assistant for identifying and fixing issues",
        default_tools=["Read", "Edit", "Bash", "Grep", "Glob"],
        category="development",
        system_prompt="""You are a debugging specialist focused on identifying and resolving software issues.

Your role is to:
- Analyze error messages and stack traces
- Identify root causes of bugs and issues
- Suggest specific fixes and debugging strategies
- Help implement solutions step by step

Be systematic in your debugging approach and explain your reasoning.""",
    ),
    SubAgentTemplate(
        name="data-analyst",
        description="Data analysis and visualization specialist",
        default_tools=["Read", "NotebookRead", "NotebookEdit", "Write", "Bash"],
        category="analysis",
        system_prompt="""You are a data analysis expert specializing in exploratory data analysis and insights.

Your role is to:
- Analyze datasets and identify patterns
- Create visualizations and summary statistics
- Suggest data cleaning and preprocessing steps
- Provide insights and recommendations based on data

Focus on clear, actionable insights from data analysis.""",
    ),
]

SCRATCH_SYSTEM_PROMPT = """You are a specialized AI assistant for {name}.

Your role is to:
- [Define the primary responsibilities]
- [List key capabilities]
- [Specify any constraints or focus areas]

[Add any additional context or instructions specific to this sub-agent's purpose.]"""

CONVERTED_PROMPT_PREFIX = """You are a specialized sub-agent for {name}.

{description}

Your role is to help users with tasks related to this specialty. Use the provided tools and your expertise to assist effectively.

## Original Command Instructions:
"""

# ═══════════════════════════════════════════════════════════════════
# CLAUDE.md templates
# ═══════════════════════════════════════════════════════════════════

PROJECT_TYPES = {
    "nodejs": "Node.js/JavaScript",
    "react": "React",
    "vue": "Vue.js",
    "python": "Python",
    "go": "Go",
    "rust": "Rust",
    "java": "Java",
    "dotnet": "C#/.NET",
    "generic": "Generic/Other",
}

CLAUDE_MD_TEMPLATES = {
    "nodejs": """# Claude Configuration for Node.js Project

## Bash Commands
- npm install: Install dependencies
- npm run dev: Start development server
- npm run build: Build the project
- npm test: Run tests
- npm run lint: Run linter

## Code Style
- Use ES modules (import/export) syntax, not CommonJS (require)
- Destructure imports when possible (eg. import { foo } from 'bar')
- Use async/await instead of callbacks
- Follow ESLint configuration

## Testing
- Use Jest for unit tests
- Place tests in __tests__ directories or *.test.js files
- Run single tests for performance: npm test -- --testNamePattern="test name"

## Workflow
- Always run tests after making changes
- Check linting before committing
- Use meaningful commit messages""",

    "react": """# Claude Configuration for React Project

## Bash Commands
- npm start: Start development server
- npm run build: Build for production
- npm test: Run tests
- npm run lint: Run ESLint

## Code Style
- Use functional components with hooks
- Destructure props and state
- Use TypeScript for better type safety

## Component Guidelines
- Place components in src/components/
- Use PascalCase for component names
- Use React.memo() for performance optimization when needed

## Testing
- Use React Testing Library
- Test user interactions, not implementation details

## Workflow
- Run type checking when done making changes
- Test components after modifications""",

    "vue": """# Claude Configuration for Vue.js Project

## Bash Commands
- npm run serve: Start development server
- npm run build: Build for production
- npm test: Run tests
- npm run lint: Run ESLint

## Code Style
- Use Composition API for new components
- Follow Vue style guide
- Use single-file components (.vue files)

## Testing
- Use Vue Test Utils
- Test component behavior, not implementation

## Workflow
- Use Vue DevTools for debugging
- Validate props with proper types""",

    "python": """# Claude Configuration for Python Project

## Bash Commands
- python -m venv venv: Create virtual environment
- pip install -r requirements.txt: Install dependencies
- python -m pytest: Run tests
- python -m black .: Format code
- python -m flake8: Run linter

## Code Style
- Follow PEP 8 style guidelines
- Use type hints for function signatures
- Use docstrings for functions and classes

## Testing
- Use pytest for testing
- Use fixtures for test data
- Separate tests in tests/ directory

## Environment
- Always use virtual environments
- Pin dependency versions in requirements.txt
- Use .env files for environment variables""",

    "go": """# Claude Configuration for Go Project

## Bash Commands
- go mod tidy: Clean up dependencies
- go build: Build the project
- go test ./...: Run all tests
- go fmt ./...: Format code
- go vet ./...: Run static analysis

## Code Style
- Follow Go conventions and idioms
- Prefer composition over inheritance
- Handle errors explicitly

## Testing
- Write table-driven tests
- Mock external dependencies""",

    "rust": """# Claude Configuration for Rust Project

## Bash Commands
- cargo build: Build the project
- cargo test: Run tests
- cargo fmt: Format code
- cargo clippy: Run linter

## Code Style
- Follow Rust naming conventions
- Prefer borrowing over ownership transfer
- Handle errors with Result type

## Testing
- Unit tests in same file as code
- Integration tests in tests/""",

    "java": """# Claude Configuration for Java Project

## Bash Commands
- mvn clean install: Build project
- mvn test: Run tests
- mvn package: Create JAR/WAR

## Code Style
- Follow Java naming conventions
- Prefer composition over inheritance
- Use Optional for nullable returns

## Testing
- Use JUnit 5 for unit tests
- Mockito for mocking""",

    "dotnet": """# Claude Configuration for .NET Project

## Bash Commands
- dotnet build: Build the project
- dotnet run: Run the project
- dotnet test: Run tests
- dotnet format: Format code

## Code Style
- Follow C# naming conventions
- Prefer async/await for I/O
- Use LINQ for collections

## Testing
- Use xUnit for testing
- Separate unit and integration tests""",

    "generic": """# Claude Configuration

## Bash Commands
- List your common commands here
- Example: make build
- Example: ./scripts/test.sh

## Code Style
- Define your coding standards
- Specify formatting rules

## Testing Instructions
- How to run tests
- Testing framework used

## Workflow
- Development process
- Code review guidelines

## Project-Specific Notes
- Environment setup requirements
- Known issues or workarounds""",
}


def get_claude_md_template(project_type: str) -> str:
    return CLAUDE_MD_TEMPLATES.get(project_type, CLAUDE_MD_TEMPLATES["generic"])
