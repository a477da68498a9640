from jira_report.cli import cli

cli()
