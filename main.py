"""
Main CLI Entry Point
Command-line interface for static-site CloudFormation stacks:
- render the template
- deploy a site stack and wait for it
- inspect status / outputs, delete stacks
"""

import sys
import argparse
from pathlib import Path

from sitestack.services import SiteDeploymentService, DeploymentOutcome
from sitestack.template import SiteConfig, build_template, render_template_body
from sitestack.utils.logger import get_logger, set_level
from sitestack.utils.config import get_settings
from sitestack.utils.validators import StackNameValidator

logger = get_logger(__name__)


def _service() -> SiteDeploymentService:
    settings = get_settings()
    set_level(settings.log_level)
    return SiteDeploymentService(config=settings)


def cmd_template(args):
    """Render the CloudFormation template as JSON"""
    template = build_template(SiteConfig(dns_enabled=args.dns))
    body = render_template_body(template, indent=2)

    if args.output:
        Path(args.output).write_text(body + "\n", encoding="utf-8")
        logger.info(f"✅ Template written to {args.output}")
    else:
        print(body)


def cmd_deploy(args):
    """Create the site stack"""
    try:
        stack_name = args.stack or StackNameValidator.from_domain(args.domain)
        logger.info(f"Deploying stack: {stack_name}")

        result = _service().deploy(
            stack_name=stack_name,
            domain=args.domain,
            dns_enabled=args.dns,
            wait=not args.no_wait,
            timeout_minutes=args.timeout,
        )

        print(f"\n{'='*60}")
        print(f" STACK {result['status'].value}")
        print(f"{'='*60}")
        print(f"  Stack ID:  {result['stack_id']}")
        for key, output in result["outputs"].items():
            print(f"  {key:<20} {output['value']}")
        print(f"{'='*60}\n")

    except Exception as e:
        logger.error(f"❌ Deployment failed: {str(e)}")
        sys.exit(1)


def cmd_status(args):
    """Classify the stack's current event log"""
    try:
        outcome = _service().get_status(args.stack)

        print(f"\n{'='*60}")
        print(f" STACK: {args.stack}")
        print(f"{'='*60}")
        print(f"  Status: {outcome.value}")
        print(f"{'='*60}\n")

        if outcome is DeploymentOutcome.FAILED:
            sys.exit(2)

    except Exception as e:
        logger.error(f"❌ Failed to get stack status: {str(e)}")
        sys.exit(1)


def cmd_outputs(args):
    """Show stack outputs"""
    try:
        outputs = _service().get_outputs(args.stack)

        print(f"\n{'='*60}")
        print(f" STACK OUTPUTS: {args.stack}")
        print(f"{'='*60}")
        for key, output in outputs.items():
            print(f"  {key:<20} {output['value']}")
            if output.get("description"):
                print(f"  {'':<20} {output['description']}")
        print(f"{'='*60}\n")

    except Exception as e:
        logger.error(f"❌ Failed to fetch outputs: {str(e)}")
        sys.exit(1)


def cmd_delete(args):
    """Delete a stack"""
    try:
        _service().delete(args.stack)
    except Exception as e:
        logger.error(f"❌ Failed to delete stack: {str(e)}")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Static site CloudFormation stacks (S3 + CloudFront + Route53)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the template
  python main.py template --dns

  # Deploy and wait for CREATE_COMPLETE
  python main.py deploy --domain blog.example.com --dns

  # Check a stack / read its outputs
  python main.py status blog-example-com-site
  python main.py outputs blog-example-com-site
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ==================== TEMPLATE COMMAND ====================
    template_parser = subparsers.add_parser("template", help="Render the CloudFormation template")
    template_parser.add_argument("--dns", action="store_true", help="Include Route53 hosted zone and alias record")
    template_parser.add_argument("--output", help="Write to file instead of stdout")
    template_parser.set_defaults(func=cmd_template)

    # ==================== DEPLOY COMMAND ====================
    deploy_parser = subparsers.add_parser("deploy", help="Create the site stack")
    deploy_parser.add_argument("--domain", required=True, help="Domain served by CloudFront")
    deploy_parser.add_argument("--stack", help="Stack name (default: derived from domain)")
    deploy_parser.add_argument("--dns", action="store_true", default=None, help="Include Route53 hosted zone and alias record")
    deploy_parser.add_argument("--no-wait", action="store_true", help="Return right after submitting")
    deploy_parser.add_argument("--timeout", type=int, help="Minutes to wait (default: from config)")
    deploy_parser.set_defaults(func=cmd_deploy)

    # ==================== STACK COMMANDS ====================
    status_parser = subparsers.add_parser("status", help="Show deployment status")
    status_parser.add_argument("stack", help="Stack name or id")
    status_parser.set_defaults(func=cmd_status)

    outputs_parser = subparsers.add_parser("outputs", help="Show stack outputs")
    outputs_parser.add_argument("stack", help="Stack name or id")
    outputs_parser.set_defaults(func=cmd_outputs)

    delete_parser = subparsers.add_parser("delete", help="Delete a stack")
    delete_parser.add_argument("stack", help="Stack name or id")
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
