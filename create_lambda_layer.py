#!/usr/bin/env python3
"""
Create the Lambda Layer with python-ulid and bcrypt.
Note: boto3 is already available in the Lambda runtime.
bcrypt ships compiled wheels, so the install targets the Lambda platform
rather than the machine running this script.
"""
import subprocess
import os
import shutil
from pathlib import Path

layer_dir = 'lambda_layer/python'
os.makedirs(layer_dir, exist_ok=True)

print("Creating Lambda Layer...")
print(f"Layer directory: {layer_dir}\n")

print("Installing python-ulid and bcrypt for the Lambda runtime...")
result = subprocess.run(
    [
        'pip', 'install',
        'python-ulid>=2.2.0',
        'bcrypt>=4.0.0',
        '-t', layer_dir,
        '--platform', 'manylinux2014_x86_64',
        '--python-version', '3.11',
        '--implementation', 'cp',
        '--only-binary=:all:',
        '--upgrade',
        '--no-cache-dir'
    ],
    capture_output=True,
    text=True
)

if result.returncode == 0:
    print("✓ Installed python-ulid, bcrypt and dependencies")
    if result.stdout:
        print(f"  {result.stdout[:200]}...")
else:
    print("✗ Failed to install dependencies")
    print(f"Error: {result.stderr}")
    exit(1)

print("\nInstalled packages:")
for item in os.listdir(layer_dir):
    if os.path.isdir(os.path.join(layer_dir, item)) and not item.startswith('__'):
        print(f"  - {item}")

# Keep dist-info for dependency tracking
print("\nCleaning up unnecessary files...")
patterns_to_remove = [
    '__pycache__',
    '*.pyc',
    'bin'
]

for pattern in patterns_to_remove:
    for item in Path(layer_dir).rglob(pattern):
        if item.is_dir():
            shutil.rmtree(item)
            print(f"  ✓ Removed {item.relative_to(layer_dir)}/")
        else:
            item.unlink()
            print(f"  ✓ Removed {item.relative_to(layer_dir)}")

print("\n✅ Lambda Layer created successfully!")
print(f"\nLayer location: {layer_dir}")
print("\nNext steps:")
print("1. python package_lambdas.py")
print("2. cd deployments && cdk deploy catalog-dev-stack")
